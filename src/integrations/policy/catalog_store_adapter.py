"""
Catalog Store Adapter

Boundary between the synchronizer and the ``delivery_products`` store.
Includes:
- Config precheck (missing/placeholder credentials never reach the network)
- A time bound on every store call; the call is cancelled when it expires
- Failure classification into NotConfiguredError / StoreTimeoutError / RemoteError
- Response normalization into Product models

No retries happen here; retry policy belongs to the caller.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

import httpx

from src.integrations.contracts.interfaces import CatalogueClient, Product, ProductDraft, to_update_record
from src.integrations.errors import CatalogStoreError, NotConfiguredError, RemoteError, StoreTimeoutError
from src.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    normalize_product_record,
    normalize_product_rows,
)
from src.utils.config_loader import CatalogSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CatalogStoreAdapter:
    def __init__(self, client: CatalogueClient, settings: CatalogSettings, timeout_seconds: Optional[float] = None):
        self.client = client
        self.settings = settings
        self.timeout_seconds = timeout_seconds or settings.store.timeout_seconds

    async def fetch_all(self, *, active_only: bool = True) -> List[Product]:
        """Read the catalogue ordered by name (only active rows unless told otherwise)."""
        rows = await self._call("fetch", lambda: self.client.list_products(active_only=active_only))
        return self._normalize(normalize_product_rows, rows)

    async def create(self, draft: ProductDraft) -> Product:
        """Insert a product and return the stored record (id and timestamps assigned by the store)."""
        record = draft.to_record()
        row = await self._call("create", lambda: self.client.insert_product(record))
        return self._normalize(normalize_product_record, row)

    async def update(self, product_id: str, fields: Dict[str, Any]) -> Product:
        """Partially update a product and return the full stored record."""
        updates = to_update_record(fields)
        row = await self._call("update", lambda: self.client.update_product(product_id, updates))
        return self._normalize(normalize_product_record, row)

    async def soft_delete(self, product_id: str) -> Product:
        """Mark a product inactive. The row is kept in the store."""
        row = await self._call("soft_delete", lambda: self.client.update_product(product_id, {"is_active": False}))
        return self._normalize(normalize_product_record, row)

    async def _call(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        if not self.settings.is_configured():
            raise NotConfiguredError()

        try:
            # wait_for cancels the store call when the bound expires.
            return await asyncio.wait_for(call(), timeout=self.timeout_seconds)
        except CatalogStoreError:
            raise
        except asyncio.TimeoutError as e:
            logger.error("Catalog store %s timed out after %ss", operation, self.timeout_seconds)
            raise StoreTimeoutError(self.timeout_seconds, operation) from e
        except httpx.TimeoutException as e:
            logger.error("Catalog store %s timed out at the transport: %s", operation, e)
            raise StoreTimeoutError(self.timeout_seconds, operation) from e
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from catalog store during {operation}: {e.response.status_code} {e.response.text}")
            raise RemoteError(_status_message(e.response), status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            logger.error(f"Request error connecting to catalog store during {operation}: {e}")
            raise RemoteError(str(e) or e.__class__.__name__) from e
        except LookupError as e:
            logger.error("Catalog store %s matched no row: %s", operation, e)
            raise RemoteError(str(e), status_code=404) from e
        except ValueError as e:
            # json.JSONDecodeError: a 2xx body that is not JSON (proxy/gateway pages).
            logger.error("Catalog store %s returned an unreadable body: %s", operation, e)
            raise RemoteError(f"Catalog store returned an invalid response body during {operation}") from e

    @staticmethod
    def _normalize(normalizer: Callable[[Any], T], raw: Any) -> T:
        try:
            return normalizer(raw)
        except IntegrationResponseError as e:
            logger.error("Malformed record from catalog store: %s", e)
            raise RemoteError(str(e)) from e


def _status_message(response: httpx.Response) -> str:
    # PostgREST error bodies look like {"message": ..., "details": ..., "code": ...}
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Catalog store responded with HTTP {response.status_code}"
