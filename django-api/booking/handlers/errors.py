"""Maps domain errors onto HTTP responses without leaking internals."""

from rest_framework import status
from rest_framework.response import Response

from booking.domain.errors import DomainError, ErrorCode

STATUS_BY_CODE = {
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SCHEDULE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DRAFT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_QUANTITY: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.SEATS_UNAVAILABLE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.BOOKING_LIMIT_EXCEEDED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.COUPON_CODE_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.COUPON_NOT_SUGGESTED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.COUPON_VALIDATION_IN_PROGRESS: status.HTTP_409_CONFLICT,
    ErrorCode.DRAFT_NOT_READY: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.UPSTREAM_UNAVAILABLE: status.HTTP_502_BAD_GATEWAY,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


def validation_response(errors) -> Response:
    return Response(
        {"code": "INVALID_REQUEST", "message": "Invalid request", "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )
