"""Seat availability and per-booking quantity limits."""

import logging
from dataclasses import dataclass

from booking.domain.errors import (
    BookingLimitExceededError,
    InvalidQuantityError,
    SeatsUnavailableError,
)
from booking.domain.models import Schedule

logger = logging.getLogger(__name__)

MAX_TICKETS_PER_BOOKING = 10
# Stepper bound for unlimited schedules, not an inventory figure.
UNLIMITED_SEATS_UI_CAP = 100


@dataclass(frozen=True)
class SeatCounts:
    """Display counts for a schedule, always summing to ``total``."""

    total: int
    available: int
    reserved: int
    sold: int
    unlimited: bool

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> "SeatCounts":
        available = schedule.available_seats.value
        reserved = schedule.reserved_seats.value
        sold = schedule.sold_seats.value
        derived = available + reserved + sold
        total = derived
        if schedule.total_seats is not None and schedule.total_seats.value != derived:
            logger.warning(
                "Schedule %s reports %d total seats but counts sum to %d",
                schedule.id,
                schedule.total_seats.value,
                derived,
            )
        return cls(
            total=total,
            available=available,
            reserved=reserved,
            sold=sold,
            unlimited=schedule.unlimited_seats,
        )

    @property
    def sold_out(self) -> bool:
        return not self.unlimited and self.available == 0

    @property
    def percent_remaining(self) -> int:
        if self.unlimited:
            return 100
        if self.total == 0:
            return 0
        return round(self.available * 100 / self.total)


def max_selectable(schedule: Schedule) -> int:
    if schedule.unlimited_seats:
        return UNLIMITED_SEATS_UI_CAP
    return schedule.available_seats.value


def quantity_ceiling(schedule: Schedule | None) -> int:
    """Largest quantity a single booking may request on ``schedule``."""
    if schedule is None:
        return MAX_TICKETS_PER_BOOKING
    return min(MAX_TICKETS_PER_BOOKING, max_selectable(schedule))


def is_quantity_valid(schedule: Schedule, quantity: int) -> bool:
    return 1 <= quantity <= min(MAX_TICKETS_PER_BOOKING, max_selectable(schedule))


def check_quantity(schedule: Schedule | None, quantity: int) -> None:
    """Raise the error naming the ceiling ``quantity`` breaks, if any.

    Seat availability is checked before the per-booking cap, so a schedule
    with 3 seats left reports the 3 rather than the cap.

    Raises:
        InvalidQuantityError: If quantity is below 1.
        SeatsUnavailableError: If a limited schedule has fewer seats left.
        BookingLimitExceededError: If quantity is above the per-booking cap.
    """
    if quantity < 1:
        raise InvalidQuantityError()
    if schedule is not None and not schedule.unlimited_seats:
        remaining = schedule.available_seats.value
        if quantity > remaining:
            raise SeatsUnavailableError(remaining)
    if quantity > MAX_TICKETS_PER_BOOKING:
        raise BookingLimitExceededError()
