from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from src.integrations.contracts.interfaces import Product


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.payload = payload if payload is not None else {}


def normalize_product_record(raw: Any) -> Product:
    """Validate one ``delivery_products`` row into a Product."""
    if isinstance(raw, list):
        # PostgREST returns a one-element array for return=representation writes.
        raw = _single_row(raw)
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Expected a product record, got {type(raw).__name__}.", payload=raw)

    product_id = _first_non_empty(raw, "id")
    payload = dict(raw)
    payload["id"] = str(product_id)
    return _build_model(Product, payload, raw)


def normalize_product_rows(raw: Any) -> List[Product]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise IntegrationResponseError(f"Expected a list of product records, got {type(raw).__name__}.", payload=raw)
    return [normalize_product_record(row) for row in raw]


def _single_row(rows: List[Any]) -> Any:
    if len(rows) != 1:
        raise IntegrationResponseError(f"Expected exactly one product record, got {len(rows)}.", payload=rows)
    return rows[0]


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
