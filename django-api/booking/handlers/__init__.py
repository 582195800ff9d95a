from booking.handlers.views import (
    DraftCheckoutView,
    DraftCouponView,
    DraftCreateView,
    DraftDetailView,
    EventDetailView,
    EventQuoteView,
    ParticipantView,
    SuggestedCouponsView,
)

__all__ = [
    "DraftCheckoutView",
    "DraftCouponView",
    "DraftCreateView",
    "DraftDetailView",
    "EventDetailView",
    "EventQuoteView",
    "ParticipantView",
    "SuggestedCouponsView",
]
