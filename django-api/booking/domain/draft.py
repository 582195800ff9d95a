"""Booking draft operations.

A draft always carries the id of the schedule that priced it. Every
operation that can change the price goes through the schedule lookup here,
so the displayed price and the schedule sent to checkout cannot diverge.
"""

from dataclasses import dataclass, fields
from datetime import UTC, date, datetime
from uuid import uuid4

from booking.domain import coupons
from booking.domain.errors import DraftNotReadyError, ScheduleNotFoundError, SeatsUnavailableError
from booking.domain.models import (
    BookingDraft,
    Event,
    Participant,
    Schedule,
    ValidatedCoupon,
)
from booking.domain.pricing import PriceBreakdown, compute_price
from booking.domain.schedule_resolver import resolve_schedule, unit_price
from booking.domain.seats import check_quantity, is_quantity_valid, quantity_ceiling
from booking.domain.value_objects import DraftId, EventId, Money, ScheduleId

PARTICIPANT_FIELDS = frozenset(f.name for f in fields(Participant)) - {"id"}


@dataclass(frozen=True)
class DraftSummary:
    """Draft joined with the schedule and price it currently shows."""

    draft: BookingDraft
    schedule: Schedule | None
    unit_price: Money
    price: PriceBreakdown
    max_quantity: int
    discount_stale: bool


@dataclass(frozen=True)
class CheckoutHandoff:
    """Snapshot consumed by checkout; targets the exact schedule priced."""

    draft_id: DraftId
    event_id: EventId
    schedule_id: ScheduleId
    selected_date: date
    quantity: int
    currency: str
    unit_price: Money
    price: PriceBreakdown
    coupon_code: str | None
    participants: tuple[Participant, ...]


def begin(
    event: Event,
    *,
    selected_date: date | datetime | None = None,
    quantity: int = 1,
) -> BookingDraft:
    """Create a draft priced by the schedule resolved for ``selected_date``."""
    schedule = resolve_schedule(event.schedules, selected_date)
    check_quantity(schedule, quantity)
    if isinstance(selected_date, datetime):
        selected_date = selected_date.date()
    return BookingDraft(
        id=DraftId(uuid4()),
        event_id=event.id,
        currency=event.currency,
        created_at=datetime.now(UTC),
        schedule_id=schedule.id if schedule is not None else None,
        selected_date=selected_date,
        quantity=quantity,
        participants=[Participant.blank(position) for position in range(1, quantity + 1)],
    )


def current_schedule(draft: BookingDraft, event: Event) -> Schedule | None:
    """Return the draft's schedule from ``event``.

    Raises:
        ScheduleNotFoundError: If the catalog no longer has that schedule.
    """
    if draft.schedule_id is None:
        return None
    schedule = event.schedule(draft.schedule_id)
    if schedule is None:
        raise ScheduleNotFoundError(str(draft.schedule_id))
    return schedule


def _resize_participants(draft: BookingDraft, quantity: int) -> None:
    kept = draft.participants[:quantity]
    for position in range(len(kept) + 1, quantity + 1):
        kept.append(Participant.blank(position))
    draft.participants = kept


def set_quantity(draft: BookingDraft, event: Event, quantity: int) -> None:
    """Change the quantity, keeping filled participants by position.

    On rejection the draft is left untouched.
    """
    check_quantity(current_schedule(draft, event), quantity)
    draft.quantity = quantity
    _resize_participants(draft, quantity)


def set_schedule(draft: BookingDraft, event: Event, schedule_id: ScheduleId) -> None:
    if event.schedule(schedule_id) is None:
        raise ScheduleNotFoundError(str(schedule_id))
    draft.schedule_id = schedule_id


def select_date(draft: BookingDraft, event: Event, selected_date: date | datetime) -> Schedule | None:
    """Record the user's date and attach the schedule that prices it.

    Quantity is not re-checked here; a quantity above the new schedule's
    availability is caught when the draft proceeds.
    """
    schedule = resolve_schedule(event.schedules, selected_date)
    if isinstance(selected_date, datetime):
        selected_date = selected_date.date()
    draft.selected_date = selected_date
    draft.schedule_id = schedule.id if schedule is not None else None
    return schedule


def set_coupon(draft: BookingDraft, coupon: ValidatedCoupon | None) -> None:
    if coupon is None:
        coupons.remove_coupon(draft.coupon)
    else:
        coupons.apply_coupon(draft.coupon, coupon)


def update_participant(draft: BookingDraft, index: int, **changes) -> Participant:
    if index < 0 or index >= len(draft.participants):
        raise IndexError(f"No participant at position {index}")
    unknown = set(changes) - PARTICIPANT_FIELDS
    if unknown:
        raise ValueError(f"Unknown participant fields: {', '.join(sorted(unknown))}")
    participant = draft.participants[index]
    for name, value in changes.items():
        setattr(participant, name, value)
    return participant


def order_amount(draft: BookingDraft, event: Event) -> Money:
    """Pre-discount amount for the draft's current schedule and quantity."""
    price = unit_price(event, current_schedule(draft, event))
    return Money(price.amount * draft.quantity)


def summarize(draft: BookingDraft, event: Event) -> DraftSummary:
    schedule = current_schedule(draft, event)
    price = unit_price(event, schedule)
    breakdown = compute_price(price, draft.quantity, draft.coupon.discount_amount)
    applied = draft.coupon.applied
    return DraftSummary(
        draft=draft,
        schedule=schedule,
        unit_price=price,
        price=breakdown,
        max_quantity=quantity_ceiling(schedule),
        discount_stale=applied is not None and applied.order_amount != breakdown.subtotal,
    )


def check_ready(draft: BookingDraft, event: Event) -> Schedule:
    """Re-validate the draft against ``event`` before it leaves for checkout.

    Raises:
        DraftNotReadyError: If no date was chosen, no schedule resolved, or
            the quantity is out of range.
        SeatsUnavailableError: If a limited schedule has fewer seats left
            than requested.
    """
    schedule = current_schedule(draft, event)
    if draft.selected_date is None or schedule is None:
        raise DraftNotReadyError()
    if not schedule.unlimited_seats and draft.quantity > schedule.available_seats.value:
        raise SeatsUnavailableError(schedule.available_seats.value)
    if not is_quantity_valid(schedule, draft.quantity):
        raise DraftNotReadyError()
    return schedule


def to_checkout(draft: BookingDraft, event: Event) -> CheckoutHandoff:
    schedule = check_ready(draft, event)
    summary = summarize(draft, event)
    return CheckoutHandoff(
        draft_id=draft.id,
        event_id=draft.event_id,
        schedule_id=schedule.id,
        selected_date=draft.selected_date,
        quantity=draft.quantity,
        currency=draft.currency,
        unit_price=summary.unit_price,
        price=summary.price,
        coupon_code=draft.coupon_code,
        participants=tuple(draft.participants),
    )
