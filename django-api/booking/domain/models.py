"""Domain models for events, schedules and booking drafts.

Events and schedules are read-only snapshots of the upstream catalog.
BookingDraft is the only mutable model; it is owned by a single draft
instance and never shared between bookings.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from booking.domain.value_objects import Capacity, DraftId, EventId, Money, ScheduleId


@dataclass(frozen=True)
class Schedule:
    """A bookable date range of an event with its own seats and price."""

    id: ScheduleId
    start_date: date
    end_date: date
    available_seats: Capacity
    reserved_seats: Capacity = Capacity(0)
    sold_seats: Capacity = Capacity(0)
    total_seats: Capacity | None = None
    price: Money | None = None
    unlimited_seats: bool = False
    is_override: bool = False

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class Event:
    """Domain representation of a bookable Event."""

    id: EventId
    title: str
    currency: str
    price: Money
    schedules: tuple[Schedule, ...] = ()
    location: str = ""
    age_range: tuple[int, int] | None = None

    def schedule(self, schedule_id: ScheduleId) -> Schedule | None:
        for schedule in self.schedules:
            if schedule.id == schedule_id:
                return schedule
        return None


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"


@dataclass(frozen=True)
class ValidatedCoupon:
    """A coupon accepted by the validation service for one order amount.

    ``discount_type`` and ``value`` are for display only; ``discount_amount``
    is authoritative.
    """

    code: str
    name: str
    discount_type: DiscountType
    value: Decimal
    discount_amount: Money
    order_amount: Money
    description: str | None = None


@dataclass(frozen=True)
class CouponValidation:
    """Successful transport-level answer from the coupon validation service."""

    success: bool
    is_valid: bool
    discount_amount: Money = Money(Decimal("0"))
    code: str = ""
    name: str = ""
    discount_type: DiscountType = DiscountType.FIXED_AMOUNT
    value: Decimal = Decimal("0")
    description: str | None = None
    reason: str | None = None


class CouponStatus(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    APPLIED = "applied"
    ERROR = "error"


@dataclass(frozen=True)
class PendingValidation:
    """Order context captured when a validation request is sent."""

    token: str
    code: str
    order_amount: Money
    quantity: int
    schedule_id: ScheduleId | None
    started_at: datetime
    quick: bool = False


@dataclass
class CouponState:
    status: CouponStatus = CouponStatus.IDLE
    applied: ValidatedCoupon | None = None
    error: str | None = None
    pending: PendingValidation | None = None

    @property
    def discount_amount(self) -> Money:
        if self.applied is None:
            return Money.zero()
        return self.applied.discount_amount


@dataclass
class Participant:
    """Placeholder for one seat, filled in during a later booking step."""

    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    age: int | None = None
    gender: str | None = None
    special_requirements: str = ""
    dietary_restrictions: list[str] = field(default_factory=list)

    @classmethod
    def blank(cls, position: int) -> "Participant":
        return cls(id=f"participant-{position}")


@dataclass
class BookingDraft:
    """In-progress selection handed to checkout once ready."""

    id: DraftId
    event_id: EventId
    currency: str
    created_at: datetime
    schedule_id: ScheduleId | None = None
    selected_date: date | None = None
    quantity: int = 1
    participants: list[Participant] = field(default_factory=list)
    coupon: CouponState = field(default_factory=CouponState)

    @property
    def coupon_code(self) -> str | None:
        if self.coupon.applied is None:
            return None
        return self.coupon.applied.code
