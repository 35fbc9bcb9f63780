"""
Catalog synchronization for the delivery storefront.

`CatalogSynchronizer` owns the in-memory catalog and its `SyncState`. It is
the only writer of either:

- loads go through the store adapter; a failed load substitutes the demo
  catalog and keeps the failure kind as non-fatal state
- create/update/soft delete write to the store first and only then splice
  the returned record into the local catalog (no full reload per write)
- every load is tagged with a sequence number and only the latest issued one
  is applied; writes that complete while a load is in flight are re-applied
  on top of that load's result
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from src.catalog.schedule import is_available
from src.catalog.validation import validate_product_draft, validate_product_updates
from src.fallback_handler import FallbackHandler
from src.integrations.contracts.interfaces import (
    AvailabilityType,
    Product,
    ProductCategory,
    ProductDraft,
    ScheduledDays,
    SyncSource,
    SyncState,
)
from src.integrations.contracts.product_catalogues import CATEGORY_ALL, CatalogFilter, filter_products
from src.integrations.errors import CatalogStoreError, DemoCatalogReadOnlyError, ProductNotFoundError
from src.integrations.policy.catalog_store_adapter import CatalogStoreAdapter

logger = logging.getLogger(__name__)


class CatalogSynchronizer:
    def __init__(
        self,
        adapter: CatalogStoreAdapter,
        *,
        fallback_handler: Optional[FallbackHandler] = None,
        include_inactive: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.adapter = adapter
        self.fallback_handler = fallback_handler or FallbackHandler()
        # False: storefront view, inactive products leave the catalog.
        # True: admin view, inactive products stay listed with is_active=False.
        self.include_inactive = include_inactive
        self._clock = clock or datetime.now

        self._products: List[Product] = []
        self._state = SyncState()

        self._load_seq = 0
        self._inflight_loads: Dict[int, int] = {}      # load seq -> mutation seq when issued
        self._mutation_seq = 0
        self._mutation_log: List[Tuple[int, Product]] = []

    # ------------------------------------------------------------------ #
    # Read access
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> SyncState:
        return replace(self._state)

    @property
    def products(self) -> Tuple[Product, ...]:
        return tuple(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def view(self, text: str = "", category: Union[str, ProductCategory] = CATEGORY_ALL) -> List[Product]:
        """Products matching a free-text query and a category selector."""
        return filter_products(self._products, CatalogFilter(text=text, category=category))

    def visible_products(self, now: Optional[datetime] = None) -> List[Product]:
        """Active products whose availability rule admits ``now`` (what the storefront lists)."""
        moment = now or self._clock()
        return [p for p in self._products if p.is_active and is_available(p, moment)]

    # ------------------------------------------------------------------ #
    # Loading
    # ------------------------------------------------------------------ #
    async def load(self) -> SyncState:
        """Fetch the catalog; fall back to demo products when the store cannot be read.

        The previous catalog stays visible until this load settles.
        """
        self._load_seq += 1
        seq = self._load_seq
        self._inflight_loads[seq] = self._mutation_seq
        self._state.loading = True
        logger.info("Loading delivery products (request #%d)", seq)

        products: Optional[List[Product]] = None
        failure: Optional[CatalogStoreError] = None
        try:
            products = await self.adapter.fetch_all(active_only=not self.include_inactive)
        except CatalogStoreError as exc:
            failure = exc
        except BaseException:
            self._abandon_load(seq)
            raise

        mutation_mark = self._inflight_loads.pop(seq)
        if seq != self._load_seq:
            logger.warning("Dropping stale load #%d (latest issued is #%d)", seq, self._load_seq)
            self._trim_mutation_log()
            return self.state

        if failure is None:
            self._apply_remote(products or [], mutation_mark)
        else:
            self._apply_demo(failure)

        self._state.loading = False
        self._state.last_synced_at = datetime.now(timezone.utc)
        self._trim_mutation_log()
        return self.state

    async def refresh(self) -> SyncState:
        """Full reconciliation with the store; same semantics as load()."""
        return await self.load()

    def _apply_remote(self, products: List[Product], mutation_mark: int) -> None:
        catalog = list(products)
        replayed = 0
        for mutation_seq, record in self._mutation_log:
            if mutation_seq > mutation_mark:
                self._merge_record(catalog, record)
                replayed += 1
        if replayed:
            logger.info("Re-applied %d write(s) that completed during the load", replayed)

        self._products = catalog
        self._state.source = SyncSource.REMOTE
        self._state.last_error = None
        self._state.last_error_message = None
        logger.info("%d products loaded from the store", len(catalog))

    def _apply_demo(self, failure: CatalogStoreError) -> None:
        self._products = self.fallback_handler.fallback_catalog(failure)
        self._state.source = SyncSource.DEMO
        self._state.last_error = failure.kind
        self._state.last_error_message = failure.message

    def _abandon_load(self, seq: int) -> None:
        self._inflight_loads.pop(seq, None)
        if seq == self._load_seq:
            self._state.loading = False
        self._trim_mutation_log()

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #
    async def create(self, draft: Union[ProductDraft, Mapping[str, Any]]) -> Product:
        """Create a product in the store and append the stored record locally."""
        valid_draft = validate_product_draft(draft)
        self._ensure_writable()

        try:
            product = await self.adapter.create(valid_draft)
        except CatalogStoreError as exc:
            logger.error("Error creating delivery product: %s", exc.message)
            raise

        self._record_mutation(product)
        logger.info("Product created: id=%s name=%s", product.id, product.name)
        return product

    async def update(self, product_id: str, fields: Mapping[str, Any]) -> Product:
        """Update a product in the store and replace the local entry with the stored record."""
        self._ensure_writable()
        self._require(product_id)
        updates = validate_product_updates(fields)

        try:
            product = await self.adapter.update(product_id, updates)
        except CatalogStoreError as exc:
            logger.error("Error updating delivery product %s: %s", product_id, exc.message)
            raise

        self._record_mutation(product)
        logger.info("Product updated: id=%s fields=%s", product_id, sorted(updates))
        return product

    async def soft_delete(self, product_id: str) -> None:
        """Mark a product inactive in the store; it never shows as active locally afterwards."""
        self._ensure_writable()
        self._require(product_id)

        try:
            product = await self.adapter.soft_delete(product_id)
        except CatalogStoreError as exc:
            logger.error("Error deleting delivery product %s: %s", product_id, exc.message)
            raise

        if product.is_active:
            logger.warning("Store returned product %s still active after soft delete", product_id)
            product = product.model_copy(update={"is_active": False})
        self._record_mutation(product)
        logger.info("Product deactivated: id=%s", product_id)

    async def toggle_active(self, product_id: str) -> Product:
        current = self._require(product_id)
        return await self.update(product_id, {"is_active": not current.is_active})

    async def save_schedule(
        self, product_id: str, scheduled_days: Optional[Union[ScheduledDays, Mapping[str, Any]]]
    ) -> Product:
        """Store a weekly schedule for a product; None makes it always available again."""
        if scheduled_days is None:
            fields: Dict[str, Any] = {"availability_type": AvailabilityType.ALWAYS, "scheduled_days": None}
        else:
            fields = {"availability_type": AvailabilityType.SCHEDULED, "scheduled_days": scheduled_days}
        return await self.update(product_id, fields)

    def _ensure_writable(self) -> None:
        if self._state.source is SyncSource.DEMO:
            raise DemoCatalogReadOnlyError()

    def _require(self, product_id: str) -> Product:
        product = self.get(product_id)
        if product is None:
            logger.error("Product %s is not in the local catalog", product_id)
            raise ProductNotFoundError(product_id)
        return product

    def _record_mutation(self, product: Product) -> None:
        self._mutation_seq += 1
        if self._inflight_loads:
            self._mutation_log.append((self._mutation_seq, product))
        if self._state.source is SyncSource.DEMO:
            # A load fell back while this write was in flight; the next remote load carries it.
            logger.warning("Product %s was written to the store but the demo catalog is shown", product.id)
            return
        self._merge_record(self._products, product)

    def _merge_record(self, catalog: List[Product], record: Product) -> None:
        index = next((i for i, p in enumerate(catalog) if p.id == record.id), None)
        if not record.is_active and not self.include_inactive:
            if index is not None:
                del catalog[index]
            return
        if index is None:
            catalog.append(record)
        else:
            catalog[index] = record

    def _trim_mutation_log(self) -> None:
        if not self._inflight_loads:
            self._mutation_log.clear()
            return
        oldest_mark = min(self._inflight_loads.values())
        self._mutation_log = [(s, p) for s, p in self._mutation_log if s > oldest_mark]
