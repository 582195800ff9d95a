"""Unit tests for the two pricing views."""

from decimal import Decimal

import pytest

from booking.domain import Money
from booking.domain.pricing import (
    compute_fee_inclusive_price,
    compute_price,
    format_amount,
    format_money,
)


class TestComputePrice:
    """Tests for the coupon-aware booking price."""

    def test_no_coupon(self):
        """Base 100 x 3 without a coupon totals 300.00."""
        price = compute_price(Money.of("100"), 3, Money.zero())
        assert price.subtotal == Money.of("300")
        assert price.discount == Money.zero()
        assert format_amount(price.total) == "300.00"

    def test_with_validated_discount(self):
        """Base 100 x 2 with a 40 discount totals 160.00."""
        price = compute_price(Money.of("100"), 2, Money.of("40"))
        assert price.subtotal == Money.of("200")
        assert price.discount == Money.of("40")
        assert format_amount(price.total) == "160.00"

    @pytest.mark.parametrize(
        "unit, quantity, discount",
        [("10", 1, "10"), ("10", 1, "25"), ("0", 4, "5"), ("19.99", 3, "1000")],
    )
    def test_total_never_negative(self, unit, quantity, discount):
        price = compute_price(Money.of(unit), quantity, Money.of(discount))
        assert price.total.amount >= 0

    def test_discount_larger_than_subtotal_floors_at_zero(self):
        price = compute_price(Money.of("50"), 1, Money.of("80"))
        assert price.total == Money.zero()
        assert price.discount == Money.of("80")

    def test_decimal_sums_do_not_drift(self):
        price = compute_price(Money.of(0.1), 3, Money.zero())
        assert price.subtotal.amount == Decimal("0.3")


class TestFeeInclusivePrice:
    """Tests for the event page price with service fee."""

    def test_ten_percent_fee(self):
        price = compute_fee_inclusive_price(Money.of("100"), 3)
        assert format_amount(price.subtotal) == "300.00"
        assert format_amount(price.service_fee) == "30.00"
        assert format_amount(price.total) == "330.00"

    def test_fee_on_fractional_price_rounds_at_display(self):
        price = compute_fee_inclusive_price(Money.of("19.99"), 1)
        assert price.total.amount == Decimal("21.9890")
        assert format_amount(price.total) == "21.99"


class TestFormatting:
    def test_format_money_prefixes_currency(self):
        assert format_money("AED", Money.of("5")) == "AED 5.00"

    def test_format_rounds_half_up(self):
        assert format_amount(Money.of("0.125")) == "0.13"
