"""
Catalog store error taxonomy.

Failures surfaced by the store adapter are classified into three kinds so the
synchronizer can decide between a demo fallback (loads) and re-raising to the
caller (mutations):

- NotConfiguredError: endpoint/key missing or still a placeholder
- StoreTimeoutError: the store call exceeded the configured bound
- RemoteError: the store was reached but rejected the operation
"""

from __future__ import annotations

from typing import Optional

from src.integrations.contracts.interfaces import SyncErrorKind


class CatalogStoreError(Exception):
    """Base class for classified store failures."""

    kind: SyncErrorKind = SyncErrorKind.REMOTE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotConfiguredError(CatalogStoreError):
    kind = SyncErrorKind.NOT_CONFIGURED

    def __init__(self, message: str = "Catalog store is not configured") -> None:
        super().__init__(message)


class StoreTimeoutError(CatalogStoreError, TimeoutError):
    kind = SyncErrorKind.TIMEOUT

    def __init__(self, timeout_seconds: float, operation: str = "query") -> None:
        super().__init__(f"Timeout: {operation} took longer than {timeout_seconds:g} seconds")
        self.timeout_seconds = timeout_seconds
        self.operation = operation


class RemoteError(CatalogStoreError):
    kind = SyncErrorKind.REMOTE

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProductNotFoundError(LookupError):
    """Raised when a mutation targets an id the local catalog does not hold."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id!r} is not in the catalog")
        self.product_id = product_id


class DemoCatalogReadOnlyError(RuntimeError):
    """Raised when a mutation is attempted while the demo catalog is shown."""

    def __init__(self) -> None:
        super().__init__("The demo catalog is read-only; reload from the store before editing products")
