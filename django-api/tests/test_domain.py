"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from booking.domain import Capacity, DraftId, EventId, Money, ScheduleId


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        """Money can be created with positive amount."""
        assert Money(Decimal("12.50")).amount == Decimal("12.50")

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money.zero().amount == 0

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(Decimal("-0.01"))

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money(Decimal("160"))) == "160.00"

    def test_money_of_float_avoids_binary_drift(self):
        """Money.of goes through the float's repr, not its binary value."""
        assert Money.of(0.1).amount + Money.of(0.2).amount == Decimal("0.3")

    def test_money_of_rejects_garbage(self):
        """Money.of raises ValueError for non-numeric input."""
        with pytest.raises(ValueError):
            Money.of("ten")

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity", float("nan")])
    def test_money_rejects_non_finite_amount(self, value):
        """Money.of raises ValueError for NaN and infinities."""
        with pytest.raises(ValueError):
            Money.of(value)


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_positive_value(self):
        """Capacity can be created with positive value."""
        assert Capacity(5).value == 5

    def test_capacity_accepts_zero(self):
        """Capacity can be created with zero."""
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        """Capacity raises ValueError for negative value."""
        with pytest.raises(ValueError):
            Capacity(-1)


class TestIdentifiers:
    """Tests for EventId, ScheduleId and DraftId."""

    def test_event_id_from_string_strips(self):
        """EventId.from_string trims surrounding whitespace."""
        assert EventId.from_string(" 65f1c0ffee ").value == "65f1c0ffee"

    @pytest.mark.parametrize("raw", ["", "a/b", "x" * 65, "drop table"])
    def test_event_id_rejects_malformed(self, raw):
        """EventId raises ValueError for values unsafe to put in a URL path."""
        with pytest.raises(ValueError):
            EventId.from_string(raw)

    def test_schedule_ids_compare_by_value(self):
        """Two ScheduleIds with the same value are equal."""
        assert ScheduleId("s-1") == ScheduleId.from_string("s-1")

    def test_draft_id_from_string_valid_uuid(self):
        """DraftId.from_string parses valid UUID."""
        value = uuid4()
        assert DraftId.from_string(str(value)).value == value

    def test_draft_id_from_string_invalid_uuid(self):
        """DraftId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            DraftId.from_string("not-a-uuid")
