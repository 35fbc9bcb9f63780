"""
Local Product Catalogue Client (in-memory).

Purpose:
- Development-time stand-in for the Supabase ``delivery_products`` table when
  no credentials are available, and the store double used by the tests.
- Assigns ids and timestamps the way the real store does, so callers see
  server-assigned fields on every write.

Failure scenarios are configurable:
- ``latency`` / ``queue_latency(...)`` delay calls (to exercise timeouts and
  overlapping loads)
- ``fail_with`` raises the given exception from the next calls
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Deque, Dict, Iterable, List, Optional

from src.integrations.contracts.interfaces import CatalogueClient

logger = logging.getLogger(__name__)


class LocalCatalogueClient(CatalogueClient):
    def __init__(
        self,
        rows: Optional[Iterable[Dict[str, Any]]] = None,
        latency: float = 0.0,
        fail_with: Optional[BaseException] = None,
    ) -> None:
        self._rows: Dict[str, Dict[str, Any]] = {}
        for row in rows or []:
            stored = dict(row)
            stored.setdefault("id", str(uuid.uuid4()))
            self._rows[str(stored["id"])] = stored
        self.latency = latency
        self.fail_with = fail_with
        self.calls: List[str] = []
        self.cancelled_calls = 0
        self._queued_latencies: Deque[float] = deque()

    # --- Scenario helpers -----------------------------------------------------

    def queue_latency(self, *seconds: float) -> None:
        """Delay the next calls by these amounts, in order, before falling back to ``latency``."""
        self._queued_latencies.extend(seconds)

    def rows(self) -> List[Dict[str, Any]]:
        return [dict(row) for row in self._rows.values()]

    async def _simulate(self, operation: str) -> None:
        self.calls.append(operation)
        delay = self._queued_latencies.popleft() if self._queued_latencies else self.latency
        try:
            if delay:
                await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.cancelled_calls += 1
            logger.debug("[LOCAL] %s cancelled after timeout", operation)
            raise
        if self.fail_with is not None:
            raise self.fail_with

    # --- CatalogueClient ----------------------------------------------------

    async def list_products(self, *, active_only: bool = True) -> List[Dict[str, Any]]:
        # Snapshot when the query reaches the store; latency only delays the response.
        rows = [dict(row) for row in self._rows.values() if row.get("is_active", True) or not active_only]
        await self._simulate("list")
        return sorted(rows, key=lambda row: str(row.get("name", "")))

    async def insert_product(self, record: Dict[str, Any]) -> Dict[str, Any]:
        await self._simulate("insert")
        now = datetime.now(timezone.utc).isoformat()
        stored = dict(record)
        stored["id"] = str(uuid.uuid4())
        stored["created_at"] = now
        stored["updated_at"] = now
        self._rows[stored["id"]] = stored
        logger.info("[LOCAL] Inserted product %s (%s)", stored["id"], stored.get("name"))
        return dict(stored)

    async def update_product(self, product_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        await self._simulate("update")
        if product_id not in self._rows:
            raise LookupError(f"update returned no row for id {product_id} (no row matched)")
        stored = self._rows[product_id]
        stored.update({k: v for k, v in updates.items() if k not in ("id", "created_at")})
        stored["updated_at"] = datetime.now(timezone.utc).isoformat()
        logger.info("[LOCAL] Updated product %s fields=%s", product_id, sorted(updates))
        return dict(stored)
