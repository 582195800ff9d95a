"""HTTP clients for the upstream catalog and coupon validation service."""

import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any
from urllib.parse import quote

import httpx

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
from booking.domain.errors import CouponServiceError, UpstreamUnavailableError
from booking.domain.coupons import GENERIC_COUPON_FAILURE
from booking.domain.schedule_resolver import to_calendar_date
from booking.stores.interfaces import CouponValidator, EventSource

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "AED"


def _count(record: Mapping[str, Any], key: str) -> Capacity:
    return Capacity(int(record.get(key) or 0))


def parse_schedule(record: Mapping[str, Any]) -> Schedule:
    """Build a Schedule from an upstream ``dateSchedule`` entry."""
    start = record.get("startDate") or record["date"]
    end = record.get("endDate") or record.get("date") or start
    total = record.get("totalSeats")
    price = record.get("price")
    return Schedule(
        id=ScheduleId.from_string(str(record.get("_id") or record["id"])),
        start_date=to_calendar_date(start),
        end_date=to_calendar_date(end),
        available_seats=_count(record, "availableSeats"),
        reserved_seats=_count(record, "reservedSeats"),
        sold_seats=_count(record, "soldSeats"),
        total_seats=Capacity(int(total)) if total is not None else None,
        price=Money.of(price) if price is not None else None,
        unlimited_seats=bool(record.get("unlimitedSeats", False)),
        is_override=bool(record.get("isOverride", False)),
    )


def _location(raw: Any) -> str:
    if isinstance(raw, Mapping):
        parts = [raw.get("city"), raw.get("address")]
        return ", ".join(part for part in parts if part)
    return str(raw or "")


def parse_event(record: Mapping[str, Any]) -> Event:
    """Build an Event from the upstream event document."""
    age_range = record.get("ageRange")
    return Event(
        id=EventId.from_string(str(record.get("_id") or record["id"])),
        title=str(record.get("title", "")),
        currency=str(record.get("currency") or DEFAULT_CURRENCY),
        price=Money.of(record.get("price") or 0),
        schedules=tuple(parse_schedule(entry) for entry in record.get("dateSchedule") or ()),
        location=_location(record.get("location")),
        age_range=(int(age_range[0]), int(age_range[1])) if age_range else None,
    )


class HttpEventSource(EventSource):
    """Fetches events from ``GET {base_url}/events/{id}``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    def get_event(self, event_id: EventId, fresh: bool = False) -> Event | None:
        try:
            with httpx.Client(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                response = client.get(f"/events/{event_id}")
        except httpx.HTTPError as exc:
            logger.warning("Event source request for %s failed: %s", event_id, exc)
            raise UpstreamUnavailableError() from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        if response.is_error:
            logger.warning("Event source returned %s for %s", response.status_code, event_id)
            raise UpstreamUnavailableError()

        try:
            body = response.json()
            return parse_event(body.get("data", body))
        except (
            AttributeError, KeyError, TypeError, ValueError, IndexError, ArithmeticError
        ) as exc:
            logger.warning("Malformed event document for %s: %s", event_id, exc)
            raise UpstreamUnavailableError() from exc


def _discount_type(raw: Any) -> DiscountType:
    try:
        return DiscountType(raw)
    except ValueError:
        logger.debug("Unknown coupon type %r, displaying as fixed amount", raw)
        return DiscountType.FIXED_AMOUNT


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or GENERIC_COUPON_FAILURE
    if isinstance(body, Mapping) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or GENERIC_COUPON_FAILURE


class HttpCouponValidator(CouponValidator):
    """Calls ``POST {base_url}/coupons/validate/{code}``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def validate(
        self,
        code: str,
        order_amount: Money,
        event_ids: Sequence[EventId],
        auth_token: str | None = None,
    ) -> CouponValidation:
        headers = {"Authorization": auth_token} if auth_token else {}
        payload = {
            "orderAmount": float(order_amount.quantized()),
            "eventIds": [str(event_id) for event_id in event_ids],
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    f"/coupons/validate/{quote(code, safe='')}",
                    json=payload,
                    headers=headers,
                )
        except httpx.HTTPError as exc:
            logger.warning("Coupon validation request failed: %s", exc)
            raise CouponServiceError(GENERIC_COUPON_FAILURE) from exc

        if response.is_error:
            raise CouponServiceError(_error_message(response))

        try:
            body = response.json()
            data = body.get("data") or {}
            coupon = data.get("coupon") or {}
            is_valid = bool(data.get("isValid"))
            return CouponValidation(
                success=bool(body.get("success")),
                is_valid=is_valid,
                discount_amount=Money.of(data.get("discountAmount") or 0),
                code=str(coupon.get("code") or code),
                name=str(coupon.get("name") or ""),
                discount_type=_discount_type(coupon.get("type")),
                value=Decimal(str(coupon.get("value") or 0)),
                description=coupon.get("description"),
                reason=None if is_valid else (data.get("reason") or body.get("message")),
            )
        except (AttributeError, TypeError, ValueError, ArithmeticError) as exc:
            logger.warning("Malformed coupon validation response: %s", exc)
            raise CouponServiceError(GENERIC_COUPON_FAILURE) from exc
