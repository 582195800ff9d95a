from django.urls import path

from booking.handlers import (
    DraftCheckoutView,
    DraftCouponView,
    DraftCreateView,
    DraftDetailView,
    EventDetailView,
    EventQuoteView,
    ParticipantView,
    SuggestedCouponsView,
)

urlpatterns = [
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/quote", EventQuoteView.as_view(), name="event-quote"),
    path("coupons/suggested", SuggestedCouponsView.as_view(), name="coupon-suggested"),
    path("drafts", DraftCreateView.as_view(), name="draft-create"),
    path("drafts/<str:draft_id>", DraftDetailView.as_view(), name="draft-detail"),
    path(
        "drafts/<str:draft_id>/participants/<int:index>",
        ParticipantView.as_view(),
        name="draft-participant",
    ),
    path("drafts/<str:draft_id>/coupon", DraftCouponView.as_view(), name="draft-coupon"),
    path("drafts/<str:draft_id>/checkout", DraftCheckoutView.as_view(), name="draft-checkout"),
]
