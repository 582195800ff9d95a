"""Booking service - orchestrates the pricing engine over the stores.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache

from django.conf import settings

from booking.domain import BookingDraft, DraftId, Event, EventId, Money, Schedule, ScheduleId
from booking.domain import coupons
from booking.domain import draft as drafts
from booking.domain.draft import CheckoutHandoff, DraftSummary
from booking.domain.errors import (
    CouponNotSuggestedError,
    CouponServiceError,
    CouponValidationInProgressError,
    DraftNotFoundError,
    EventNotFoundError,
    InvalidEventIdError,
    ScheduleNotFoundError,
)
from booking.domain.models import PendingValidation
from booking.domain.pricing import FeeInclusivePrice, compute_fee_inclusive_price
from booking.domain.schedule_resolver import resolve_schedule, unit_price
from booking.domain.seats import SeatCounts, check_quantity, quantity_ceiling
from booking.stores import (
    CacheDraftStore,
    CachedEventSource,
    CouponValidator,
    DraftStore,
    EventSource,
    HttpCouponValidator,
    HttpEventSource,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventQuote:
    """Event page pricing before a draft exists."""

    event: Event
    schedule: Schedule | None
    seats: SeatCounts | None
    unit_price: Money
    quantity: int
    max_quantity: int
    price: FeeInclusivePrice


class BookingService:
    """Service for schedule resolution, pricing and booking drafts."""

    def __init__(
        self,
        events: EventSource,
        drafts: DraftStore,
        coupon_validator: CouponValidator,
        suggested_codes: Sequence[str] = (),
        validation_timeout: float = 10.0,
    ) -> None:
        self._events = events
        self._drafts = drafts
        self._coupon_validator = coupon_validator
        self._suggested_codes = tuple(code.strip().upper() for code in suggested_codes)
        self._validation_timeout = timedelta(seconds=validation_timeout)

    def get_event(self, event_id: str, fresh: bool = False) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is malformed.
            EventNotFoundError: If the event does not exist.
        """
        try:
            parsed = EventId.from_string(event_id)
        except ValueError as exc:
            raise InvalidEventIdError() from exc
        event = self._events.get_event(parsed, fresh=fresh)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def quote_event(
        self,
        event_id: str,
        selected_date: date | None = None,
        quantity: int = 1,
    ) -> EventQuote:
        """Fee-inclusive price for the event page.

        Raises:
            InvalidQuantityError, SeatsUnavailableError,
            BookingLimitExceededError: If ``quantity`` breaks a ceiling.
        """
        event = self.get_event(event_id)
        schedule = resolve_schedule(event.schedules, selected_date)
        check_quantity(schedule, quantity)
        price = unit_price(event, schedule)
        return EventQuote(
            event=event,
            schedule=schedule,
            seats=SeatCounts.from_schedule(schedule) if schedule is not None else None,
            unit_price=price,
            quantity=quantity,
            max_quantity=quantity_ceiling(schedule),
            price=compute_fee_inclusive_price(price, quantity),
        )

    def suggested_coupons(self) -> tuple[str, ...]:
        return self._suggested_codes

    def start_draft(
        self,
        event_id: str,
        selected_date: date | None = None,
        quantity: int = 1,
    ) -> DraftSummary:
        event = self.get_event(event_id)
        draft = drafts.begin(event, selected_date=selected_date, quantity=quantity)
        self._drafts.save(draft)
        logger.info("Started draft %s for event %s", draft.id, event.id)
        return drafts.summarize(draft, event)

    def get_draft(self, draft_id: str) -> DraftSummary:
        draft, event = self._load(draft_id)
        return drafts.summarize(draft, event)

    def update_draft(
        self,
        draft_id: str,
        selected_date: date | None = None,
        quantity: int | None = None,
        schedule_id: str | None = None,
    ) -> DraftSummary:
        """Apply a date, schedule and/or quantity change as one update.

        Nothing is stored if any part is rejected.
        """
        draft, event = self._load(draft_id)
        if selected_date is not None:
            drafts.select_date(draft, event, selected_date)
        if schedule_id is not None:
            try:
                parsed = ScheduleId.from_string(schedule_id)
            except ValueError as exc:
                raise ScheduleNotFoundError(schedule_id) from exc
            drafts.set_schedule(draft, event, parsed)
        if quantity is not None:
            drafts.set_quantity(draft, event, quantity)
        self._drafts.save(draft)
        return drafts.summarize(draft, event)

    def update_participant(self, draft_id: str, index: int, **changes) -> DraftSummary:
        draft, event = self._load(draft_id)
        drafts.update_participant(draft, index, **changes)
        self._drafts.save(draft)
        return drafts.summarize(draft, event)

    async def apply_coupon(
        self,
        draft_id: str,
        code: str,
        auth_token: str | None = None,
        quick: bool = False,
    ) -> DraftSummary:
        """Validate ``code`` against the draft's current order amount.

        A rejected coupon is reported through the draft's coupon state, not
        raised. The draft is re-read after the remote call so that a response
        computed for an amount the user no longer sees is discarded. Any
        other failure drops the pending validation before propagating.

        Raises:
            CouponCodeRequiredError: If the code is blank.
            CouponNotSuggestedError: If a quick-apply code is not suggested.
            CouponValidationInProgressError: If another validation is pending.
        """
        if quick and code.strip().upper() not in self._suggested_codes:
            raise CouponNotSuggestedError(code)

        draft, event = self._load(draft_id)
        pending = coupons.begin_validation(
            draft,
            code,
            drafts.order_amount(draft, event),
            quick=quick,
            expires_after=self._validation_timeout,
        )
        timeout = self._validation_timeout.total_seconds()
        if not self._drafts.claim_validation(draft.id, pending.token, timeout):
            raise CouponValidationInProgressError()

        try:
            self._drafts.save(draft)
            return await self._settle(draft_id, pending, [draft.event_id], auth_token)
        except Exception:
            self._abandon(draft.id, pending)
            raise
        finally:
            self._drafts.release_validation(draft.id, pending.token)

    async def _settle(
        self,
        draft_id: str,
        pending: PendingValidation,
        event_ids: list[EventId],
        auth_token: str | None,
    ) -> DraftSummary:
        try:
            result = await self._coupon_validator.validate(
                pending.code, pending.order_amount, event_ids, auth_token
            )
        except CouponServiceError as exc:
            draft, event = self._load(draft_id)
            coupons.fail_validation(draft, pending, exc.message, drafts.order_amount(draft, event))
        else:
            draft, event = self._load(draft_id)
            coupons.complete_validation(draft, pending, result, drafts.order_amount(draft, event))

        self._drafts.save(draft)
        return drafts.summarize(draft, event)

    def remove_coupon(self, draft_id: str) -> DraftSummary:
        draft, event = self._load(draft_id)
        if draft.coupon.pending is not None:
            self._drafts.release_validation(draft.id, draft.coupon.pending.token)
        drafts.set_coupon(draft, None)
        self._drafts.save(draft)
        return drafts.summarize(draft, event)

    def discard_draft(self, draft_id: str) -> None:
        draft = self._load_draft(draft_id)
        self._drafts.delete(draft.id)
        logger.info("Discarded draft %s", draft.id)

    def checkout(self, draft_id: str) -> CheckoutHandoff:
        """Re-check the draft against fresh schedule data and hand it off.

        Raises:
            DraftNotReadyError: If date, schedule or quantity is missing.
            SeatsUnavailableError: If seats ran out since selection.
        """
        draft = self._load_draft(draft_id)
        event = self.get_event(str(draft.event_id), fresh=True)
        handoff = drafts.to_checkout(draft, event)
        logger.info(
            "Draft %s ready for checkout: schedule %s, quantity %d",
            draft.id,
            handoff.schedule_id,
            handoff.quantity,
        )
        return handoff

    def _load_draft(self, draft_id: str) -> BookingDraft:
        try:
            parsed = DraftId.from_string(draft_id)
        except ValueError as exc:
            raise DraftNotFoundError(draft_id) from exc
        draft = self._drafts.get(parsed)
        if draft is None:
            raise DraftNotFoundError(draft_id)
        return draft

    def _load(self, draft_id: str) -> tuple[BookingDraft, Event]:
        draft = self._load_draft(draft_id)
        return draft, self.get_event(str(draft.event_id))

    def _abandon(self, draft_id: DraftId, pending: PendingValidation) -> None:
        draft = self._drafts.get(draft_id)
        if draft is not None:
            coupons.discard_validation(draft, pending)
            self._drafts.save(draft)


@lru_cache
def get_booking_service() -> BookingService:
    """Return the service wired from Django settings."""
    events = CachedEventSource(
        HttpEventSource(settings.BOOKING_API_BASE_URL, timeout=settings.BOOKING_HTTP_TIMEOUT),
        ttl=settings.BOOKING_EVENT_CACHE_TTL,
    )
    return BookingService(
        events=events,
        drafts=CacheDraftStore(ttl=settings.BOOKING_DRAFT_TTL),
        coupon_validator=HttpCouponValidator(
            settings.BOOKING_API_BASE_URL, timeout=settings.BOOKING_HTTP_TIMEOUT
        ),
        suggested_codes=settings.BOOKING_SUGGESTED_COUPONS,
        validation_timeout=settings.BOOKING_HTTP_TIMEOUT,
    )
