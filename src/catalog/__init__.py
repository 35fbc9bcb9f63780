"""
Delivery catalog engine.

- schedule: weekly availability windows (pure)
- validation: product draft / update preconditions
- synchronizer: the in-memory catalog kept in sync with the store

``build_synchronizer`` wires settings, adapter and synchronizer. It builds the
Supabase client from the settings unless a client is injected.
"""

from typing import Optional

from src.integrations.contracts.interfaces import CatalogueClient
from src.integrations.clients.real_http.supabase_product_catalogues import SupabaseCatalogueClient
from src.integrations.policy.catalog_store_adapter import CatalogStoreAdapter
from src.utils.config_loader import CatalogSettings, load_catalog_settings

from .schedule import is_available
from .synchronizer import CatalogSynchronizer
from .validation import ProductValidationError, validate_product_draft, validate_product_updates


def build_synchronizer(
    settings: Optional[CatalogSettings] = None,
    client: Optional[CatalogueClient] = None,
) -> CatalogSynchronizer:
    """Wire settings, store client and adapter into a synchronizer."""
    settings = settings or load_catalog_settings()
    if client is None:
        client = SupabaseCatalogueClient(
            base_url=settings.store.url,
            api_key=settings.store.anon_key,
            table=settings.store.table,
            timeout_seconds=settings.store.timeout_seconds,
        )
    adapter = CatalogStoreAdapter(client, settings)
    return CatalogSynchronizer(adapter, include_inactive=settings.catalog.include_inactive)


__all__ = [
    "CatalogSynchronizer",
    "ProductValidationError",
    "build_synchronizer",
    "is_available",
    "validate_product_draft",
    "validate_product_updates",
]
