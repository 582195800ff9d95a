"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Self
from uuid import UUID

MONEY_PLACES = Decimal("0.01")

_UPSTREAM_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


@dataclass(frozen=True)
class EventId:
    """Identifier of an Event in the upstream catalog."""

    value: str

    def __post_init__(self) -> None:
        if not _UPSTREAM_ID.match(self.value):
            raise ValueError("Invalid event identifier")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ScheduleId:
    """Identifier of a Schedule; correlates pricing with checkout."""

    value: str

    def __post_init__(self) -> None:
        if not _UPSTREAM_ID.match(self.value):
            raise ValueError("Invalid schedule identifier")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DraftId:
    """Unique identifier for a BookingDraft."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not self.amount.is_finite():
            raise ValueError(f"Invalid money amount: {self.amount}")
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def of(cls, value: Decimal | int | float | str) -> Self:
        """Build from any numeric input without going through binary floats."""
        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"Invalid money amount: {value!r}") from exc
        return cls(amount=amount)

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0"))

    def quantized(self) -> Decimal:
        return self.amount.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")
