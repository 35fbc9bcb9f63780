"""
Demo Product Catalogue.

Purpose:
- Fixed, hard-coded products shown when the real store is unconfigured or
  unreachable, so the storefront stays usable in a read-only demo mode.
- Does NOT make any network calls.

Two datasets exist:
- NOT_CONFIGURED_DEMO: local environments without Supabase credentials
- OFFLINE_DEMO: the store is configured but timed out or rejected the read
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from src.integrations.contracts.interfaces import Product, ProductCategory, SyncErrorKind

logger = logging.getLogger(__name__)

_DEMO_IMAGE_URL = "https://images.pexels.com/photos/1092730/pexels-photo-1092730.jpeg?auto=compress&cs=tinysrgb&w=400"


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

NOT_CONFIGURED_DEMO: List[Product] = [
    Product(
        id="demo-delivery-acai-500g",
        name="Açaí 500g (Demo)",
        category=ProductCategory.ACAI,
        price=Decimal("22.99"),
        description="Açaí tradicional com 3 complementos grátis.",
        image_url=_DEMO_IMAGE_URL,
        is_active=True,
    ),
    Product(
        id="demo-delivery-combo-casal",
        name="Combo Casal (Demo)",
        category=ProductCategory.COMBO,
        price=Decimal("49.99"),
        description="1kg de açaí + milkshake 300ml.",
        image_url=_DEMO_IMAGE_URL,
        is_active=True,
    ),
]

OFFLINE_DEMO: List[Product] = [
    Product(
        id="demo-acai-300",
        name="Açaí 300ml",
        category=ProductCategory.ACAI,
        price=Decimal("15.90"),
        description="Açaí tradicional 300ml",
        image_url=_DEMO_IMAGE_URL,
        is_active=True,
        is_weighable=False,
    ),
    Product(
        id="demo-acai-500",
        name="Açaí 500ml",
        category=ProductCategory.ACAI,
        price=Decimal("22.90"),
        description="Açaí tradicional 500ml",
        image_url=_DEMO_IMAGE_URL,
        is_active=True,
        is_weighable=False,
    ),
]

_DATASETS: Dict[SyncErrorKind, List[Product]] = {
    SyncErrorKind.NOT_CONFIGURED: NOT_CONFIGURED_DEMO,
    SyncErrorKind.TIMEOUT: OFFLINE_DEMO,
    SyncErrorKind.REMOTE: OFFLINE_DEMO,
}


class DemoCatalogueProvider:
    """Deterministic fallback dataset, chosen by the reason the store was skipped."""

    def get_catalog(self, reason: Optional[SyncErrorKind] = None) -> List[Product]:
        dataset = _DATASETS.get(reason, NOT_CONFIGURED_DEMO) if reason else NOT_CONFIGURED_DEMO
        logger.debug("Serving %d demo products (reason=%s)", len(dataset), reason)
        # Fresh copies so callers cannot corrupt the seed data.
        return [product.model_copy(deep=True) for product in dataset]
