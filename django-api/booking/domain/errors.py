"""Domain error codes for the booking module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    SCHEDULE_NOT_FOUND = "SCHEDULE_NOT_FOUND"
    DRAFT_NOT_FOUND = "DRAFT_NOT_FOUND"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    SEATS_UNAVAILABLE = "SEATS_UNAVAILABLE"
    BOOKING_LIMIT_EXCEEDED = "BOOKING_LIMIT_EXCEEDED"
    COUPON_CODE_REQUIRED = "COUPON_CODE_REQUIRED"
    COUPON_NOT_SUGGESTED = "COUPON_NOT_SUGGESTED"
    COUPON_VALIDATION_IN_PROGRESS = "COUPON_VALIDATION_IN_PROGRESS"
    DRAFT_NOT_READY = "DRAFT_NOT_READY"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidEventIdError(DomainError):
    """Raised when an event ID is malformed."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class EventNotFoundError(DomainError):
    """Raised when the data source has no such event."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class ScheduleNotFoundError(DomainError):
    """Raised when a schedule id does not belong to the draft's event."""

    def __init__(self, schedule_id: str) -> None:
        super().__init__(
            code=ErrorCode.SCHEDULE_NOT_FOUND,
            message="Schedule not found for event",
        )
        self.schedule_id = schedule_id


class DraftNotFoundError(DomainError):
    """Raised when a draft expired or never existed."""

    def __init__(self, draft_id: str) -> None:
        super().__init__(
            code=ErrorCode.DRAFT_NOT_FOUND,
            message="Booking draft not found",
        )
        self.draft_id = draft_id


class InvalidQuantityError(DomainError):
    """Raised for quantities below one."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_QUANTITY,
            message="Quantity must be at least 1",
        )


class SeatsUnavailableError(DomainError):
    """Raised when a quantity exceeds the seats left on a schedule."""

    def __init__(self, remaining: int) -> None:
        noun = "seat" if remaining == 1 else "seats"
        super().__init__(
            code=ErrorCode.SEATS_UNAVAILABLE,
            message=f"Only {remaining} {noun} available for this date",
        )
        self.remaining = remaining


class BookingLimitExceededError(DomainError):
    """Raised when a quantity exceeds the per-booking ceiling."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_LIMIT_EXCEEDED,
            message="Maximum 10 tickets per booking",
        )


class CouponCodeRequiredError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.COUPON_CODE_REQUIRED,
            message="Please enter a coupon code",
        )


class CouponNotSuggestedError(DomainError):
    def __init__(self, code: str) -> None:
        super().__init__(
            code=ErrorCode.COUPON_NOT_SUGGESTED,
            message="This coupon is not available for quick apply",
        )
        self.coupon_code = code


class CouponValidationInProgressError(DomainError):
    """Raised when a second validation is submitted for the same draft."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.COUPON_VALIDATION_IN_PROGRESS,
            message="A coupon is already being validated",
        )


class DraftNotReadyError(DomainError):
    """Raised when a draft is handed to checkout without date or quantity."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DRAFT_NOT_READY,
            message="Please select a date and specify the number of participants",
        )


class UpstreamUnavailableError(DomainError):
    """Raised when the schedule data source cannot be reached."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.UPSTREAM_UNAVAILABLE,
            message="Event data is temporarily unavailable",
        )


class CouponServiceError(Exception):
    """Failure reported by the coupon validation service.

    Only the human-readable message is meaningful; callers map it through
    the coupon message table rather than relying on status codes.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
