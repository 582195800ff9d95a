"""Serializers for request input and for rendering domain models."""

from rest_framework import serializers

from booking.domain.pricing import format_amount, format_money
from booking.domain.seats import SeatCounts


class MoneyField(serializers.Field):
    """Renders Money as a two-decimal string."""

    def __init__(self, **kwargs):
        kwargs["read_only"] = True
        super().__init__(**kwargs)

    def to_representation(self, value):
        return format_amount(value)


class SeatCountsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    available = serializers.IntegerField()
    reserved = serializers.IntegerField()
    sold = serializers.IntegerField()
    unlimited = serializers.BooleanField()
    sold_out = serializers.BooleanField()
    percent_remaining = serializers.IntegerField()


class ScheduleSerializer(serializers.Serializer):
    """Serializer for Schedule domain model."""

    id = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    price = MoneyField(allow_null=True)
    unlimited_seats = serializers.BooleanField()
    is_override = serializers.BooleanField()
    seats = serializers.SerializerMethodField()

    def get_seats(self, schedule):
        return SeatCountsSerializer(SeatCounts.from_schedule(schedule)).data


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    title = serializers.CharField()
    currency = serializers.CharField()
    price = MoneyField()
    location = serializers.CharField()
    age_range = serializers.ListField(child=serializers.IntegerField(), allow_null=True)
    schedules = ScheduleSerializer(many=True)


class FeeInclusivePriceSerializer(serializers.Serializer):
    subtotal = MoneyField()
    service_fee = MoneyField()
    total = MoneyField()


class EventQuoteSerializer(serializers.Serializer):
    event_id = serializers.CharField(source="event.id")
    currency = serializers.CharField(source="event.currency")
    schedule_id = serializers.SerializerMethodField()
    seats = serializers.SerializerMethodField()
    unit_price = MoneyField()
    quantity = serializers.IntegerField()
    max_quantity = serializers.IntegerField()
    price = FeeInclusivePriceSerializer()

    def get_schedule_id(self, quote):
        return str(quote.schedule.id) if quote.schedule is not None else None

    def get_seats(self, quote):
        if quote.seats is None:
            return None
        return SeatCountsSerializer(quote.seats).data


class PriceBreakdownSerializer(serializers.Serializer):
    subtotal = MoneyField()
    discount = MoneyField()
    total = MoneyField()


class AppliedCouponSerializer(serializers.Serializer):
    code = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    discount_type = serializers.CharField(source="discount_type.value")
    value = serializers.DecimalField(max_digits=12, decimal_places=2)
    discount_amount = MoneyField()
    order_amount = MoneyField()


class CouponStateSerializer(serializers.Serializer):
    status = serializers.CharField(source="status.value")
    applied = AppliedCouponSerializer(allow_null=True)
    error = serializers.CharField(allow_null=True)


class ParticipantSerializer(serializers.Serializer):
    """Renders participants and validates partial updates to them."""

    GENDERS = ("male", "female", "other")

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(allow_null=True, required=False, max_length=200)
    email = serializers.EmailField(allow_null=True, required=False)
    phone = serializers.CharField(allow_null=True, required=False, max_length=40)
    age = serializers.IntegerField(allow_null=True, required=False, min_value=0, max_value=120)
    gender = serializers.ChoiceField(choices=GENDERS, allow_null=True, required=False)
    special_requirements = serializers.CharField(allow_blank=True, required=False)
    dietary_restrictions = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False
    )


class DraftSummarySerializer(serializers.Serializer):
    id = serializers.CharField(source="draft.id")
    event_id = serializers.CharField(source="draft.event_id")
    schedule_id = serializers.CharField(source="draft.schedule_id", allow_null=True)
    selected_date = serializers.DateField(source="draft.selected_date", allow_null=True)
    quantity = serializers.IntegerField(source="draft.quantity")
    max_quantity = serializers.IntegerField()
    currency = serializers.CharField(source="draft.currency")
    unit_price = MoneyField()
    price = PriceBreakdownSerializer()
    display_total = serializers.SerializerMethodField()
    coupon = CouponStateSerializer(source="draft.coupon")
    discount_stale = serializers.BooleanField()
    participants = ParticipantSerializer(source="draft.participants", many=True)

    def get_display_total(self, summary):
        return format_money(summary.draft.currency, summary.price.total)


class CheckoutHandoffSerializer(serializers.Serializer):
    draft_id = serializers.CharField()
    event_id = serializers.CharField()
    schedule_id = serializers.CharField()
    selected_date = serializers.DateField()
    quantity = serializers.IntegerField()
    currency = serializers.CharField()
    unit_price = MoneyField()
    price = PriceBreakdownSerializer()
    coupon_code = serializers.CharField(allow_null=True)
    participants = ParticipantSerializer(many=True)


class QuoteQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    quantity = serializers.IntegerField(required=False, default=1)


class DraftCreateSerializer(serializers.Serializer):
    event_id = serializers.CharField(max_length=64)
    date = serializers.DateField(required=False, allow_null=True)
    quantity = serializers.IntegerField(required=False, default=1)


class DraftUpdateSerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    schedule_id = serializers.CharField(required=False, max_length=64)
    quantity = serializers.IntegerField(required=False)


class CouponApplySerializer(serializers.Serializer):
    code = serializers.CharField(allow_blank=True, max_length=50)
    quick = serializers.BooleanField(required=False, default=False)
