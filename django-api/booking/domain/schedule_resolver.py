"""Pick the schedule that prices and seats a booking for a calendar date."""

import logging
from collections.abc import Sequence
from datetime import UTC, date, datetime

from booking.domain.models import Event, Schedule
from booking.domain.value_objects import Money

logger = logging.getLogger(__name__)


def to_calendar_date(value: date | datetime | str) -> date:
    """Reduce a date-like value to its year-month-day.

    Aware datetimes (and ISO strings carrying an offset) are read on the UTC
    calendar so that ``2024-06-15T00:00:00.000Z`` and
    ``2024-06-15T02:00:00+02:00`` land on the same day as the catalog stores
    them. Naive values are taken at face value.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date()
    return value


def resolve_schedule(
    schedules: Sequence[Schedule],
    selected_date: date | datetime | None,
) -> Schedule | None:
    """Return the schedule applying to ``selected_date``.

    No date yields the first schedule in catalog order. Among the schedules
    whose range contains the date, a single override wins; otherwise the first
    match wins. A date outside every range still falls back to the first
    schedule, so a price is always available once the catalog is non-empty.
    """
    if not schedules:
        return None
    if selected_date is None:
        return schedules[0]

    if isinstance(selected_date, datetime):
        day = selected_date.date()
    else:
        day = selected_date

    matches = [schedule for schedule in schedules if schedule.contains(day)]
    if not matches:
        logger.debug("No schedule covers %s, falling back to first", day)
        return schedules[0]

    overrides = [schedule for schedule in matches if schedule.is_override]
    if len(overrides) == 1:
        return overrides[0]
    return matches[0]


def unit_price(event: Event, schedule: Schedule | None) -> Money:
    """Schedule price when present, else the event's base price."""
    if schedule is not None and schedule.price is not None:
        return schedule.price
    return event.price
