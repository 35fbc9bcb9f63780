"""
Supabase Product Catalogue HTTP Client.

Purpose:
- Reads and writes the ``delivery_products`` table through the Supabase REST
  (PostgREST) endpoint
- Returns raw row dicts; the store adapter normalizes them into Product models

Important:
- This client should be the ONLY place that talks HTTP to the catalogue store.
- It does not classify failures: httpx errors propagate to the store adapter.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from src.integrations.contracts.interfaces import CatalogueClient

logger = logging.getLogger(__name__)


class SupabaseCatalogueClient(CatalogueClient):
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        table: str = "delivery_products",
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("SUPABASE_URL", "")).rstrip("/")
        self.api_key = api_key or os.getenv("SUPABASE_ANON_KEY", "")
        self.table = table
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self, *, returning: bool = False) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if returning:
            headers["Prefer"] = "return=representation"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport)

    async def list_products(self, *, active_only: bool = True) -> List[Dict[str, Any]]:
        params = {"select": "*", "order": "name.asc"}
        if active_only:
            params["is_active"] = "eq.true"

        async with self._client() as client:
            response = await client.get(self.table_url, params=params, headers=self._headers())
            response.raise_for_status()
            data = response.json() if response.content else []

        logger.debug("Fetched %d rows from %s", len(data or []), self.table)
        return data or []

    async def insert_product(self, record: Dict[str, Any]) -> Dict[str, Any]:
        async with self._client() as client:
            response = await client.post(self.table_url, json=[record], headers=self._headers(returning=True))
            response.raise_for_status()
            rows = response.json() if response.content else []

        return self._only_row(rows, "insert")

    async def update_product(self, product_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        params = {"id": f"eq.{product_id}"}
        async with self._client() as client:
            response = await client.patch(
                self.table_url, params=params, json=updates, headers=self._headers(returning=True)
            )
            response.raise_for_status()
            rows = response.json() if response.content else []

        return self._only_row(rows, "update", product_id=product_id)

    def _only_row(self, rows: Any, operation: str, product_id: Optional[str] = None) -> Dict[str, Any]:
        if isinstance(rows, dict):
            return rows
        if not rows:
            target = f" for id {product_id}" if product_id else ""
            # PostgREST answers 200 with [] when the filter matched nothing.
            raise LookupError(f"{operation} returned no row{target} (no row matched)")
        return rows[0]
