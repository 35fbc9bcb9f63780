"""
Integrations layer.
This package contains all code used to communicate with the catalogue store:
- Supabase REST ``delivery_products`` table (real HTTP client)
- Local in-memory and demo catalogues (development, tests, offline fallback)

Key rule:
- The catalog synchronizer MUST NOT call the store directly.
- It calls the store adapter (src/integrations/policy/catalog_store_adapter.py),
  which wraps a client under src/integrations/clients.

Switching implementations:
- ``build_synchronizer`` (src/catalog/__init__.py) builds the Supabase client
  unless a client is passed in; the local client is only used when injected
  (tests, scripts/run_catalog_demo.py).
"""

from .contracts.interfaces import (
    AvailabilityType,
    CatalogueClient,
    DaySchedule,
    Product,
    ProductCategory,
    ProductDraft,
    ScheduledDays,
    SyncErrorKind,
    SyncSource,
    SyncState,
    Weekday,
)
from .contracts.product_catalogues import (
    CATEGORY_ALL,
    CATEGORY_LABELS,
    CatalogFilter,
    category_label,
    filter_products,
)
from .errors import (
    CatalogStoreError,
    DemoCatalogReadOnlyError,
    NotConfiguredError,
    ProductNotFoundError,
    RemoteError,
    StoreTimeoutError,
)

__all__ = [
    # interfaces
    "AvailabilityType", "CatalogueClient", "DaySchedule", "Product",
    "ProductCategory", "ProductDraft", "ScheduledDays", "SyncErrorKind",
    "SyncSource", "SyncState", "Weekday",
    # products
    "CATEGORY_ALL", "CATEGORY_LABELS", "CatalogFilter", "category_label", "filter_products",
    # errors
    "CatalogStoreError", "DemoCatalogReadOnlyError", "NotConfiguredError",
    "ProductNotFoundError", "RemoteError", "StoreTimeoutError",
]
