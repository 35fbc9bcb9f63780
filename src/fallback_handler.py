"""Fallback handling utilities.

This module decides what the storefront shows when the catalog store cannot
be read: a demo catalog chosen by the failure kind, logged at a level that
matches how alarming the failure is.
"""
from typing import List, Optional

import logging
from src.integrations.clients.mocks.demo_product_catalogues import DemoCatalogueProvider
from src.integrations.contracts.interfaces import Product, SyncErrorKind
from src.integrations.errors import CatalogStoreError

logger = logging.getLogger(__name__)


class FallbackHandler:
    """Substitutes the demo catalog for a failed load and logs the trigger.

    - not configured: expected in local/demo environments, logged as a warning
    - timeout / remote error: logged as an error with the store's message
    """

    def __init__(self, demo_provider: Optional[DemoCatalogueProvider] = None):
        self.demo_provider = demo_provider or DemoCatalogueProvider()

    def fallback_catalog(self, error: CatalogStoreError) -> List[Product]:
        kind = error.kind
        if kind is SyncErrorKind.NOT_CONFIGURED:
            logger.warning("Supabase not configured - using demo products for delivery")
        else:
            logger.error("Error fetching delivery products (%s): %s - using demo products", kind.value, error.message)

        products = self.demo_provider.get_catalog(kind)
        logger.info("Demo catalog substituted: reason=%s, products=%d", kind.value, len(products))
        return products
