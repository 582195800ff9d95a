"""Unit tests for seat availability and quantity ceilings."""

import pytest

from booking.domain.errors import (
    BookingLimitExceededError,
    InvalidQuantityError,
    SeatsUnavailableError,
)
from booking.domain.seats import (
    MAX_TICKETS_PER_BOOKING,
    UNLIMITED_SEATS_UI_CAP,
    SeatCounts,
    check_quantity,
    is_quantity_valid,
    max_selectable,
    quantity_ceiling,
)


class TestMaxSelectable:
    def test_limited_schedule_uses_available_seats(self, make_schedule):
        assert max_selectable(make_schedule(available=7)) == 7

    def test_unlimited_schedule_uses_ui_cap(self, make_schedule):
        """Unlimited schedules expose the stepper cap, not the seat count."""
        assert max_selectable(make_schedule(available=2, unlimited=True)) == UNLIMITED_SEATS_UI_CAP

    def test_ceiling_never_exceeds_booking_limit(self, make_schedule):
        assert quantity_ceiling(make_schedule(available=50)) == MAX_TICKETS_PER_BOOKING
        assert quantity_ceiling(make_schedule(available=4)) == 4
        assert quantity_ceiling(None) == MAX_TICKETS_PER_BOOKING


class TestIsQuantityValid:
    """Tests for is_quantity_valid."""

    @pytest.mark.parametrize("available", [0, 1, 3, 10, 25])
    @pytest.mark.parametrize("quantity", [0, 1, 3, 10, 11])
    def test_limited_schedule_bounds(self, make_schedule, available, quantity):
        """Valid iff 1 <= q <= min(10, available)."""
        schedule = make_schedule(available=available)
        expected = 1 <= quantity <= min(10, available)
        assert is_quantity_valid(schedule, quantity) is expected

    def test_unlimited_allows_up_to_ten(self, make_schedule):
        schedule = make_schedule(available=0, unlimited=True)
        assert all(is_quantity_valid(schedule, q) for q in range(1, 11))

    def test_unlimited_rejects_eleven(self, make_schedule):
        assert not is_quantity_valid(make_schedule(unlimited=True), 11)


class TestCheckQuantity:
    """Tests for the error raised when a ceiling is hit."""

    def test_seat_message_names_remaining_count(self, make_schedule):
        """Requesting 5 of 3 remaining seats reports the 3."""
        with pytest.raises(SeatsUnavailableError) as exc_info:
            check_quantity(make_schedule(available=3), 5)
        assert exc_info.value.remaining == 3
        assert "3" in exc_info.value.message

    def test_seat_ceiling_reported_before_hard_cap(self, make_schedule):
        with pytest.raises(SeatsUnavailableError):
            check_quantity(make_schedule(available=3), 11)

    def test_hard_cap_message(self, make_schedule):
        with pytest.raises(BookingLimitExceededError) as exc_info:
            check_quantity(make_schedule(available=50), 11)
        assert exc_info.value.message == "Maximum 10 tickets per booking"

    def test_unlimited_skips_seat_check(self, make_schedule):
        check_quantity(make_schedule(available=0, unlimited=True), 10)

    def test_unlimited_still_capped(self, make_schedule):
        with pytest.raises(BookingLimitExceededError):
            check_quantity(make_schedule(unlimited=True), 11)

    def test_below_one_rejected(self, make_schedule):
        with pytest.raises(InvalidQuantityError):
            check_quantity(make_schedule(), 0)


class TestSeatCounts:
    """Tests for display seat counts."""

    def test_total_derived_when_missing(self, make_schedule):
        counts = SeatCounts.from_schedule(make_schedule(available=5, reserved=2, sold=3))
        assert counts.total == 10
        assert counts.percent_remaining == 50

    def test_inconsistent_total_replaced_by_sum(self, make_schedule, caplog):
        """Upstream total that disagrees with the counts is not displayed."""
        counts = SeatCounts.from_schedule(
            make_schedule(available=5, reserved=2, sold=3, total=40)
        )
        assert counts.total == 10
        assert "40 total seats" in caplog.text

    def test_sold_out_only_for_limited(self, make_schedule):
        assert SeatCounts.from_schedule(make_schedule(available=0, sold=10)).sold_out
        assert not SeatCounts.from_schedule(make_schedule(available=0, unlimited=True)).sold_out

    def test_empty_schedule_has_no_remaining_percentage(self, make_schedule):
        assert SeatCounts.from_schedule(make_schedule(available=0)).percent_remaining == 0
