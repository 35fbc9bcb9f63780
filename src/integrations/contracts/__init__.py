"""
Contracts (data models).

This folder defines the shapes exchanged with the ``delivery_products`` store:
- Product / ProductDraft / ScheduledDays records
- the CatalogueClient interface implemented by real and local clients
- the catalogue filter and category labels

Both the real HTTP client and the local/demo clients use these contracts, so
the synchronizer never handles ad-hoc dicts.
"""
