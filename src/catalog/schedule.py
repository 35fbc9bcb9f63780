"""Weekly availability windows.

A scheduled product is purchasable only inside its window for the current
weekday: ``start_time <= now < end_time``. Evaluation is pure; callers
re-evaluate on every render/tick and own any refresh-at-boundary timers.
"""

from __future__ import annotations

from datetime import datetime

from src.integrations.contracts.interfaces import AvailabilityType, DaySchedule, Product, Weekday


def is_available(product: Product, now: datetime) -> bool:
    """Return True when the product's availability rule admits ``now``.

    ``is_active`` is not consulted here; soft-deleted products are the
    caller's concern.
    """
    if product.availability_type != AvailabilityType.SCHEDULED or product.scheduled_days is None:
        return True

    day = product.scheduled_days.for_weekday(Weekday.from_datetime(now))
    return _within_window(day, now)


def _within_window(day: DaySchedule, now: datetime) -> bool:
    if not day.enabled:
        return False
    # start == end is an empty window, never an all-day one.
    if day.start_time >= day.end_time:
        return False
    moment = now.time()
    return day.start_time <= moment < day.end_time
