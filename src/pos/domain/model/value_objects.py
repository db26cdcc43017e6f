"""Money and Quantity: the value types every bill is built from.

Both are frozen and check themselves on construction, so a bill can
never hold a negative amount or an empty line.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import total_ordering
from typing import Iterable

from pos.domain.exceptions import ValidationError

ZERO = Decimal("0")


@total_ordering
@dataclass(frozen=True)
class Money:
    """Non-negative amount in the restaurant's currency.

    Arithmetic stays exact; rounding to two places happens only when an
    amount is displayed or compared with cash at the counter.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < ZERO:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __sub__(self, other: Money) -> Money:
        if other.amount > self.amount:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(self.amount - other.amount)

    def __mul__(self, factor: int | Decimal) -> Money:
        # bool is an int subclass
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor)

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    @staticmethod
    def zero() -> Money:
        return Money(ZERO)

    @staticmethod
    def sum(amounts: Iterable[Money]) -> Money:
        return Money(sum((m.amount for m in amounts), ZERO))

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Parse user or file input, e.g. ``Money.of("199.00")``."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """Units of one menu item on a bill; always at least one."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError("Quantity must be at least 1")

    def __add__(self, other: Quantity) -> Quantity:
        return Quantity(self.value + other.value)

    def __str__(self) -> str:
        return str(self.value)
