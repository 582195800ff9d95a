"""Pytest configuration and shared fixtures."""

from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from booking.domain import (
    Capacity,
    CouponValidation,
    DiscountType,
    Event,
    EventId,
    Money,
    Schedule,
    ScheduleId,
)
from booking.domain.errors import CouponServiceError
from booking.services import BookingService
from booking.stores import CacheDraftStore, CouponValidator, EventSource

SUGGESTED_CODES = ("WELCOME10", "SAVE20", "EARLYBIRD")


class FakeEventSource(EventSource):
    def __init__(self) -> None:
        self.events: dict[EventId, Event] = {}
        self.fresh_reads = 0
        self.failure: Exception | None = None

    def add(self, event: Event) -> Event:
        self.events[event.id] = event
        return event

    def get_event(self, event_id: EventId, fresh: bool = False) -> Event | None:
        if self.failure is not None:
            raise self.failure
        if fresh:
            self.fresh_reads += 1
        return self.events.get(event_id)


class FakeCouponValidator(CouponValidator):
    """Answers from ``discounts`` (code -> amount) or raises from ``errors``."""

    def __init__(self) -> None:
        self.discounts: dict[str, str] = {}
        self.errors: dict[str, str] = {}
        self.calls: list[tuple] = []
        self.during_call = None

    async def validate(self, code, order_amount, event_ids, auth_token=None):
        self.calls.append((code, order_amount, tuple(event_ids), auth_token))
        if self.during_call is not None:
            self.during_call()
        if code in self.errors:
            raise CouponServiceError(self.errors[code])
        if code not in self.discounts:
            return CouponValidation(success=True, is_valid=False, reason="Coupon not found")
        return CouponValidation(
            success=True,
            is_valid=True,
            discount_amount=Money.of(self.discounts[code]),
            code=code,
            name=f"{code} promotion",
            discount_type=DiscountType.FIXED_AMOUNT,
            value=Decimal(self.discounts[code]),
        )


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_schedule():
    def _make(
        schedule_id: str = "sched-june",
        start: date = date(2024, 6, 1),
        end: date = date(2024, 6, 30),
        available: int = 20,
        reserved: int = 0,
        sold: int = 0,
        total: int | None = None,
        price: str | None = None,
        unlimited: bool = False,
        override: bool = False,
    ) -> Schedule:
        return Schedule(
            id=ScheduleId(schedule_id),
            start_date=start,
            end_date=end,
            available_seats=Capacity(available),
            reserved_seats=Capacity(reserved),
            sold_seats=Capacity(sold),
            total_seats=Capacity(total) if total is not None else None,
            price=Money.of(price) if price is not None else None,
            unlimited_seats=unlimited,
            is_override=override,
        )

    return _make


@pytest.fixture
def make_event(make_schedule):
    def _make(*schedules: Schedule, event_id: str = "evt-pottery", price: str = "100") -> Event:
        return Event(
            id=EventId(event_id),
            title="Pottery for Kids",
            currency="AED",
            price=Money.of(price),
            schedules=schedules or (make_schedule(),),
            location="Dubai, Al Quoz",
            age_range=(6, 12),
        )

    return _make


@pytest.fixture
def event_source() -> FakeEventSource:
    return FakeEventSource()


@pytest.fixture
def coupon_validator() -> FakeCouponValidator:
    return FakeCouponValidator()


@pytest.fixture
def service(event_source, coupon_validator) -> BookingService:
    return BookingService(
        events=event_source,
        drafts=CacheDraftStore(ttl=600),
        coupon_validator=coupon_validator,
        suggested_codes=SUGGESTED_CODES,
    )
