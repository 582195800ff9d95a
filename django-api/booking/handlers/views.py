"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from booking.domain.errors import DomainError
from booking.handlers.errors import error_response, validation_response
from booking.handlers.serializers import (
    CheckoutHandoffSerializer,
    CouponApplySerializer,
    DraftCreateSerializer,
    DraftSummarySerializer,
    DraftUpdateSerializer,
    EventQuoteSerializer,
    EventSerializer,
    ParticipantSerializer,
    QuoteQuerySerializer,
)
from booking.services import get_booking_service


class EventDetailView(APIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            event = get_booking_service().get_event(event_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(EventSerializer(event).data)


class EventQuoteView(APIView):
    """Handler for GET /api/events/{event_id}/quote"""

    def get(self, request: Request, event_id: str) -> Response:
        query = QuoteQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_response(query.errors)
        try:
            quote = get_booking_service().quote_event(
                event_id,
                selected_date=query.validated_data.get("date"),
                quantity=query.validated_data["quantity"],
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(EventQuoteSerializer(quote).data)


class SuggestedCouponsView(APIView):
    """Handler for GET /api/coupons/suggested"""

    def get(self, request: Request) -> Response:
        return Response({"codes": list(get_booking_service().suggested_coupons())})


class DraftCreateView(APIView):
    """Handler for POST /api/drafts"""

    def post(self, request: Request) -> Response:
        body = DraftCreateSerializer(data=request.data)
        if not body.is_valid():
            return validation_response(body.errors)
        try:
            summary = get_booking_service().start_draft(
                body.validated_data["event_id"],
                selected_date=body.validated_data.get("date"),
                quantity=body.validated_data["quantity"],
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(DraftSummarySerializer(summary).data, status=status.HTTP_201_CREATED)


class DraftDetailView(APIView):
    """Handler for GET/PATCH/DELETE /api/drafts/{draft_id}"""

    def get(self, request: Request, draft_id: str) -> Response:
        try:
            summary = get_booking_service().get_draft(draft_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(DraftSummarySerializer(summary).data)

    def patch(self, request: Request, draft_id: str) -> Response:
        body = DraftUpdateSerializer(data=request.data)
        if not body.is_valid():
            return validation_response(body.errors)
        try:
            summary = get_booking_service().update_draft(
                draft_id,
                selected_date=body.validated_data.get("date"),
                schedule_id=body.validated_data.get("schedule_id"),
                quantity=body.validated_data.get("quantity"),
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(DraftSummarySerializer(summary).data)

    def delete(self, request: Request, draft_id: str) -> Response:
        try:
            get_booking_service().discard_draft(draft_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ParticipantView(APIView):
    """Handler for PATCH /api/drafts/{draft_id}/participants/{index}"""

    def patch(self, request: Request, draft_id: str, index: int) -> Response:
        body = ParticipantSerializer(data=request.data, partial=True)
        if not body.is_valid():
            return validation_response(body.errors)
        try:
            summary = get_booking_service().update_participant(
                draft_id, index, **body.validated_data
            )
        except DomainError as exc:
            return error_response(exc)
        except IndexError:
            return Response(
                {"code": "PARTICIPANT_NOT_FOUND", "message": "Participant not found"},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(DraftSummarySerializer(summary).data)


class DraftCouponView(APIView):
    """Handler for POST/DELETE /api/drafts/{draft_id}/coupon"""

    def post(self, request: Request, draft_id: str) -> Response:
        body = CouponApplySerializer(data=request.data)
        if not body.is_valid():
            return validation_response(body.errors)
        try:
            summary = async_to_sync(get_booking_service().apply_coupon)(
                draft_id,
                body.validated_data["code"],
                auth_token=request.headers.get("Authorization"),
                quick=body.validated_data["quick"],
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(DraftSummarySerializer(summary).data)

    def delete(self, request: Request, draft_id: str) -> Response:
        try:
            summary = get_booking_service().remove_coupon(draft_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(DraftSummarySerializer(summary).data)


class DraftCheckoutView(APIView):
    """Handler for POST /api/drafts/{draft_id}/checkout"""

    def post(self, request: Request, draft_id: str) -> Response:
        try:
            handoff = get_booking_service().checkout(draft_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(CheckoutHandoffSerializer(handoff).data)
