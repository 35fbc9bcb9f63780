"""
Real HTTP integration clients.

These clients communicate with the real catalogue store via HTTP:
- Supabase REST (PostgREST) ``delivery_products`` table

Important:
- Must implement the same CatalogueClient interface as the local clients
- Must return rows shaped like src/integrations/contracts/interfaces.Product

Wiring:
``build_synchronizer`` in src/catalog/__init__.py builds this client unless
another CatalogueClient is passed in.
"""

from .supabase_product_catalogues import SupabaseCatalogueClient

__all__ = ["SupabaseCatalogueClient"]
