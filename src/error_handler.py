"""Error handling helpers for the catalog: display payloads for sync and mutation failures."""
from typing import Any, Dict, Optional
import logging

from src.catalog.validation import ProductValidationError
from src.integrations.contracts.interfaces import SyncErrorKind, SyncState
from src.integrations.errors import (
    CatalogStoreError,
    DemoCatalogReadOnlyError,
    ProductNotFoundError,
)

logger = logging.getLogger(__name__)

_LOAD_MESSAGES = {
    SyncErrorKind.NOT_CONFIGURED: "Store not configured - showing demo products.",
    SyncErrorKind.TIMEOUT: "The store took too long to answer - showing demo products.",
    SyncErrorKind.REMOTE: "Could not load products from the store - showing demo products.",
}


class ErrorHandler:
    def describe_sync_state(self, state: SyncState) -> Optional[Dict[str, Any]]:
        """Payload for the non-fatal load error banner, or None when the last load succeeded."""
        if state.last_error is None:
            return None
        kind = state.last_error
        return {
            "message": _LOAD_MESSAGES[kind],
            # Missing credentials are expected locally; nothing to alarm on.
            "severity": "info" if kind is SyncErrorKind.NOT_CONFIGURED else "warning",
            "retryable": kind is not SyncErrorKind.NOT_CONFIGURED,
            "metadata": {"error": kind.value, "detail": state.last_error_message},
        }

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        """Payload for a failed create/update/soft delete."""
        metadata: Dict[str, Any] = {"error": str(exc), "context": context or {}}

        if isinstance(exc, ProductValidationError):
            metadata["field_errors"] = dict(exc.field_errors)
            return self._payload("Please fix the highlighted fields.", "warning", False, metadata)
        if isinstance(exc, DemoCatalogReadOnlyError):
            return self._payload("Demo products cannot be edited.", "info", False, metadata)
        if isinstance(exc, ProductNotFoundError):
            logger.error("Mutation targeted a product missing from the catalog: %s", exc.product_id)
            return self._payload("Product not found - refresh the list and try again.", "error", True, metadata)
        if isinstance(exc, CatalogStoreError):
            metadata["kind"] = exc.kind.value
            retryable = exc.kind is not SyncErrorKind.NOT_CONFIGURED
            return self._payload(f"Error saving product: {exc.message}", "error", retryable, metadata)

        logger.error("Unhandled exception in catalog operation: %s", exc, exc_info=True)
        return self._payload(
            "An internal error occurred while processing your request. Please try again later.",
            "error",
            False,
            metadata,
        )

    @staticmethod
    def _payload(message: str, severity: str, retryable: bool, metadata: Dict[str, Any]) -> Dict[str, Any]:
        return {"message": message, "severity": severity, "retryable": retryable, "metadata": metadata}
