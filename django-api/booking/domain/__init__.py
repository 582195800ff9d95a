from booking.domain.models import (
    BookingDraft,
    CouponStatus,
    CouponValidation,
    DiscountType,
    Event,
    Participant,
    Schedule,
    ValidatedCoupon,
)
from booking.domain.value_objects import Capacity, DraftId, EventId, Money, ScheduleId

__all__ = [
    "BookingDraft",
    "CouponStatus",
    "CouponValidation",
    "DiscountType",
    "Event",
    "Participant",
    "Schedule",
    "ValidatedCoupon",
    "Capacity",
    "DraftId",
    "EventId",
    "Money",
    "ScheduleId",
]
