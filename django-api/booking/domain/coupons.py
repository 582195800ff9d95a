"""Coupon state transitions and the user-facing rejection messages.

A draft's coupon moves Idle -> Validating -> Applied, or
Idle -> Validating -> Error -> Idle. The discount is whatever the
validation service returned for the order amount sent with the request;
nothing here derives an amount from the coupon's type or value.
"""

import logging
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from booking.domain.errors import CouponCodeRequiredError, CouponValidationInProgressError
from booking.domain.models import (
    BookingDraft,
    CouponState,
    CouponStatus,
    CouponValidation,
    PendingValidation,
    ValidatedCoupon,
)
from booking.domain.value_objects import Money

logger = logging.getLogger(__name__)

INVALID_COUPON_MESSAGE = "Invalid coupon code. Please check and try again."
GENERIC_COUPON_FAILURE = "Failed to validate coupon"

# Evaluated top to bottom; backend texts may contain several of these.
COUPON_ERROR_MESSAGES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("not found", "invalid"), INVALID_COUPON_MESSAGE),
    (("expired",), "This coupon has expired."),
    (
        ("already used", "usage limit", "limit reached"),
        "You have already used this coupon or its usage limit has been reached.",
    ),
    (
        ("not applicable", "minimum"),
        "This coupon is not applicable to this order or the minimum order amount was not met.",
    ),
    (
        ("log in", "login", "authentication", "unauthorized"),
        "Please log in to apply a coupon.",
    ),
)


def coupon_error_message(raw: str | None) -> str:
    """Map a backend error text to the message shown to the user."""
    if not raw or not raw.strip():
        return GENERIC_COUPON_FAILURE
    lowered = raw.lower()
    for patterns, message in COUPON_ERROR_MESSAGES:
        if any(pattern in lowered for pattern in patterns):
            return message
    return raw


def apply_coupon(state: CouponState, coupon: ValidatedCoupon) -> None:
    """Replace any applied coupon with ``coupon`` in one step."""
    state.applied = coupon
    state.status = CouponStatus.APPLIED
    state.error = None
    state.pending = None


def remove_coupon(state: CouponState) -> None:
    state.applied = None
    state.status = CouponStatus.IDLE
    state.error = None
    state.pending = None


def begin_validation(
    draft: BookingDraft,
    code: str,
    order_amount: Money,
    *,
    quick: bool = False,
    now: datetime | None = None,
    expires_after: timedelta | None = None,
) -> PendingValidation:
    """Enter Validating, capturing the order context sent to the service.

    A pending validation older than ``expires_after`` belongs to a request
    that never finished and is replaced. Without ``expires_after`` a pending
    validation always blocks.

    Raises:
        CouponCodeRequiredError: If the trimmed code is empty.
        CouponValidationInProgressError: If a validation is already pending.
    """
    code = code.strip()
    if not code:
        raise CouponCodeRequiredError()
    now = now or datetime.now(UTC)
    current = draft.coupon.pending
    if current is not None:
        if expires_after is None or now - current.started_at < expires_after:
            raise CouponValidationInProgressError()
        logger.info("Replacing abandoned coupon validation for %s", current.code)

    pending = PendingValidation(
        token=uuid4().hex,
        code=code,
        order_amount=order_amount,
        quantity=draft.quantity,
        schedule_id=draft.schedule_id,
        started_at=now,
        quick=quick,
    )
    draft.coupon.status = CouponStatus.VALIDATING
    draft.coupon.error = None
    draft.coupon.pending = pending
    return pending


def is_stale(draft: BookingDraft, pending: PendingValidation, order_amount: Money) -> bool:
    """True when the draft no longer matches the context ``pending`` was sent with."""
    current = draft.coupon.pending
    return (
        current is None
        or current.token != pending.token
        or draft.quantity != pending.quantity
        or draft.schedule_id != pending.schedule_id
        or order_amount != pending.order_amount
    )


def discard_validation(draft: BookingDraft, pending: PendingValidation) -> None:
    """Leave Validating without touching the applied coupon."""
    current = draft.coupon.pending
    if current is None or current.token != pending.token:
        return
    draft.coupon.pending = None
    if draft.coupon.applied is not None:
        draft.coupon.status = CouponStatus.APPLIED
    else:
        draft.coupon.status = CouponStatus.IDLE


def _reject(draft: BookingDraft, message: str) -> None:
    draft.coupon.applied = None
    draft.coupon.pending = None
    draft.coupon.status = CouponStatus.ERROR
    draft.coupon.error = message


def complete_validation(
    draft: BookingDraft,
    pending: PendingValidation,
    result: CouponValidation,
    order_amount: Money,
) -> bool:
    """Apply a service answer; return False if it arrived for a stale draft."""
    if is_stale(draft, pending, order_amount):
        logger.info("Discarding stale coupon response for %s", pending.code)
        discard_validation(draft, pending)
        return False

    if not (result.success and result.is_valid):
        if result.reason:
            _reject(draft, coupon_error_message(result.reason))
        else:
            _reject(draft, INVALID_COUPON_MESSAGE)
        logger.info("Coupon %s rejected by validation service", pending.code)
        return True

    apply_coupon(
        draft.coupon,
        ValidatedCoupon(
            code=result.code or pending.code,
            name=result.name,
            description=result.description,
            discount_type=result.discount_type,
            value=result.value,
            discount_amount=result.discount_amount,
            order_amount=pending.order_amount,
        ),
    )
    logger.info("Coupon %s applied, discount %s", pending.code, result.discount_amount)
    return True


def fail_validation(
    draft: BookingDraft,
    pending: PendingValidation,
    raw_message: str | None,
    order_amount: Money,
) -> bool:
    """Record a thrown service error; return False if the draft moved on."""
    if is_stale(draft, pending, order_amount):
        logger.info("Discarding stale coupon failure for %s", pending.code)
        discard_validation(draft, pending)
        return False
    _reject(draft, coupon_error_message(raw_message))
    logger.info("Coupon %s validation failed: %s", pending.code, raw_message)
    return True
