from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ProductCategory(str, Enum):
    ACAI = "acai"
    COMBO = "combo"
    MILKSHAKE = "milkshake"
    VITAMINA = "vitamina"
    SORVETES = "sorvetes"
    BEBIDAS = "bebidas"
    COMPLEMENTOS = "complementos"
    SOBREMESAS = "sobremesas"
    OUTROS = "outros"


class AvailabilityType(str, Enum):
    ALWAYS = "always"
    SCHEDULED = "scheduled"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_datetime(cls, moment: datetime) -> "Weekday":
        # datetime.weekday(): 0 = monday
        return list(cls)[moment.weekday()]


class SyncSource(str, Enum):
    REMOTE = "remote"
    DEMO = "demo"


class SyncErrorKind(str, Enum):
    NOT_CONFIGURED = "not_configured"
    TIMEOUT = "timeout"
    REMOTE = "remote"


# ---------------------------------------------------------------------------
# Schedule models
# ---------------------------------------------------------------------------

class DaySchedule(BaseModel):
    """Availability window for one weekday: [start_time, end_time)."""

    enabled: bool = False
    start_time: time = time(8, 0)
    end_time: time = time(22, 0)

    @model_validator(mode="after")
    def _no_overnight_window(self) -> "DaySchedule":
        if self.enabled and self.start_time > self.end_time:
            raise ValueError(
                f"start_time {self.start_time.isoformat()} is after end_time {self.end_time.isoformat()}"
            )
        return self


class ScheduledDays(BaseModel):
    model_config = ConfigDict(extra="ignore")

    monday: DaySchedule = Field(default_factory=DaySchedule)
    tuesday: DaySchedule = Field(default_factory=DaySchedule)
    wednesday: DaySchedule = Field(default_factory=DaySchedule)
    thursday: DaySchedule = Field(default_factory=DaySchedule)
    friday: DaySchedule = Field(default_factory=DaySchedule)
    saturday: DaySchedule = Field(default_factory=DaySchedule)
    sunday: DaySchedule = Field(default_factory=DaySchedule)

    def for_weekday(self, weekday: Weekday) -> DaySchedule:
        return getattr(self, weekday.value)


# ---------------------------------------------------------------------------
# Product models
# ---------------------------------------------------------------------------

class _ProductFields(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    description: str = ""
    category: ProductCategory = ProductCategory.ACAI
    price: Decimal = Field(default=Decimal("0"), ge=0)
    original_price: Optional[Decimal] = None      # display-only reference price
    image_url: Optional[str] = None
    is_active: bool = True
    is_weighable: bool = False
    price_per_gram: Optional[Decimal] = None
    has_complements: Optional[bool] = None
    complement_groups: Any = None
    sizes: Any = None
    availability_type: AvailabilityType = AvailabilityType.ALWAYS
    scheduled_days: Optional[ScheduledDays] = None

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("is_weighable", mode="before")
    @classmethod
    def _none_weighable(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("availability_type", mode="before")
    @classmethod
    def _none_availability(cls, value: Any) -> Any:
        return AvailabilityType.ALWAYS if value in (None, "") else value

    @field_serializer("price", "original_price", "price_per_gram", when_used="json")
    def _decimal_to_number(self, value: Optional[Decimal]) -> Optional[float]:
        return None if value is None else float(value)

    def to_record(self) -> Dict[str, Any]:
        """JSON-safe dict shaped like a ``delivery_products`` row."""
        return self.model_dump(mode="json")


class ProductDraft(_ProductFields):
    """A product that has not been written to the store yet (no id)."""

    complement_groups: Any = Field(default_factory=list)


class Product(_ProductFields):
    id: str
    name: str = Field(min_length=1)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Columns the store assigns; never sent in a partial update.
STORE_MANAGED_FIELDS = frozenset({"id", "created_at", "updated_at"})


def to_update_record(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and serialize a partial update, keeping only the given writable columns."""
    writable = {k: v for k, v in fields.items() if k not in STORE_MANAGED_FIELDS}
    model = ProductDraft.model_validate(writable)
    return model.model_dump(mode="json", include=set(writable) & set(ProductDraft.model_fields))


# ---------------------------------------------------------------------------
# Synchronization state
# ---------------------------------------------------------------------------

@dataclass
class SyncState:
    source: Optional[SyncSource] = None          # None until the first load settles
    loading: bool = True
    last_error: Optional[SyncErrorKind] = None
    last_error_message: Optional[str] = None
    last_synced_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Abstract catalogue client interface
# ---------------------------------------------------------------------------

class CatalogueClient(ABC):
    """Every ``delivery_products`` store client must implement this interface.

    Clients exchange raw row dicts; normalization into ``Product`` happens in
    the store adapter.
    """

    @abstractmethod
    async def list_products(self, *, active_only: bool = True) -> List[Dict[str, Any]]:
        """Return rows ordered by name, optionally only ``is_active`` ones."""

    @abstractmethod
    async def insert_product(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored (id and timestamps assigned)."""

    @abstractmethod
    async def update_product(self, product_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a partial update to one row and return the stored row."""
