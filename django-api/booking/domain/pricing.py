"""Price computations for the two pricing views.

``compute_price`` backs the booking details view, where a validated coupon
may lower the total. ``compute_fee_inclusive_price`` backs the event page,
which is shown before any date or coupon is chosen and adds a flat service
fee. The two never share inputs: the fee view takes no discount and the
booking view takes no fee.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from booking.domain.value_objects import MONEY_PLACES, Money

SERVICE_FEE_MULTIPLIER = Decimal("1.10")


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Money
    discount: Money
    total: Money


@dataclass(frozen=True)
class FeeInclusivePrice:
    subtotal: Money
    service_fee: Money
    total: Money


def compute_price(unit_price: Money, quantity: int, discount_amount: Money) -> PriceBreakdown:
    """Subtotal minus the server-computed discount, floored at zero."""
    subtotal = unit_price.amount * quantity
    total = max(Decimal("0"), subtotal - discount_amount.amount)
    return PriceBreakdown(
        subtotal=Money(subtotal),
        discount=discount_amount,
        total=Money(total),
    )


def compute_fee_inclusive_price(unit_price: Money, quantity: int) -> FeeInclusivePrice:
    subtotal = unit_price.amount * quantity
    total = subtotal * SERVICE_FEE_MULTIPLIER
    return FeeInclusivePrice(
        subtotal=Money(subtotal),
        service_fee=Money(total - subtotal),
        total=Money(total),
    )


def format_amount(money: Money) -> str:
    """Two-decimal fixed string, rounding only at this boundary."""
    return f"{money.amount.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP):.2f}"


def format_money(currency: str, money: Money) -> str:
    return f"{currency} {format_amount(money)}"
