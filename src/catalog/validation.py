"""Backend validation for product drafts and partial updates.

The admin panel submits product forms as dictionaries (or ProductDraft
models). These validators run before any store call; on failure they raise
`ProductValidationError` carrying structured `field_errors`, so the store
adapter never sees an invalid write.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Union

from pydantic import ValidationError

from src.integrations.contracts.interfaces import AvailabilityType, ProductDraft, to_update_record


@dataclass
class ProductValidationError(Exception):
    """Exception raised for product form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: optional top-level message.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:
        fields = ", ".join(f"{k}: {v}" for k, v in self.field_errors.items())
        return f"{self.message} ({fields})" if fields else self.message


_LABELS = {
    "name": "Nome do Produto",
    "description": "Descrição",
    "price": "Preço",
    "scheduled_days": "Programação",
}


def _strip(v: Any) -> str:
    return "" if v is None else str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def require_str(payload: Mapping[str, Any], field: str, errors: Dict[str, str]) -> str:
    value = _strip(payload.get(field))
    if not value:
        add_error(errors, field, f"{_LABELS.get(field, field)} is required")
    return value


def check_price(payload: Mapping[str, Any], field: str, errors: Dict[str, str]) -> None:
    raw = payload.get(field)
    if raw is None or raw == "":
        if field == "price":
            add_error(errors, field, f"{_LABELS['price']} is required")
        return
    try:
        amount = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        add_error(errors, field, f"{field} must be a number")
        return
    if amount < 0:
        add_error(errors, field, f"{field} must be >= 0")


def _check_schedule(payload: Mapping[str, Any], errors: Dict[str, str]) -> None:
    availability = payload.get("availability_type")
    if isinstance(availability, AvailabilityType):
        availability = availability.value
    if availability == AvailabilityType.SCHEDULED.value and not payload.get("scheduled_days"):
        add_error(errors, "scheduled_days", "A scheduled product needs scheduled_days")


def _check_model(payload: Mapping[str, Any], errors: Dict[str, str]) -> None:
    try:
        to_update_record(dict(payload))
    except ValidationError as exc:
        for err in exc.errors():
            field = str(err["loc"][0]) if err.get("loc") else "__root__"
            add_error(errors, field, err.get("msg", "invalid value"))


def _as_payload(draft: Union[ProductDraft, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(draft, ProductDraft):
        return draft.model_dump()
    return dict(draft)


def validate_product_draft(draft: Union[ProductDraft, Mapping[str, Any]]) -> ProductDraft:
    """Validate a new product and return it as a ProductDraft."""
    payload = _as_payload(draft)
    errors: Dict[str, str] = {}

    require_str(payload, "name", errors)
    require_str(payload, "description", errors)
    check_price(payload, "price", errors)
    for field in ("original_price", "price_per_gram"):
        check_price(payload, field, errors)
    _check_schedule(payload, errors)
    _check_model(payload, errors)

    if errors:
        raise ProductValidationError(errors)
    return draft if isinstance(draft, ProductDraft) else ProductDraft.model_validate(payload)


def validate_product_updates(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate only the fields present in a partial update."""
    payload = dict(fields)
    errors: Dict[str, str] = {}

    for field in ("name", "description"):
        if field in payload:
            require_str(payload, field, errors)
    for field in ("price", "original_price", "price_per_gram"):
        if field in payload:
            check_price(payload, field, errors)
    if "availability_type" in payload:
        _check_schedule(payload, errors)
    _check_model(payload, errors)

    if errors:
        raise ProductValidationError(errors)
    return payload
