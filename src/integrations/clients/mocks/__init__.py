"""
Local and demo catalogue clients.

These return realistic product data without calling any external API.
They are used when:
- Supabase credentials are not configured (local/demo environments)
- We want to exercise the synchronizer end-to-end without a network

Important:
- The local client follows the SAME CatalogueClient interface as the real
  HTTP client.
- Everything returned is shaped according to src/integrations/contracts/*
"""

from .demo_product_catalogues import DemoCatalogueProvider, NOT_CONFIGURED_DEMO, OFFLINE_DEMO
from .local_product_catalogues import LocalCatalogueClient

__all__ = ["DemoCatalogueProvider", "LocalCatalogueClient", "NOT_CONFIGURED_DEMO", "OFFLINE_DEMO"]
