"""Domain service: bill totals and cash change.

Arithmetic stays exact (Decimal) all the way through; callers round with
``pos.domain.formatting`` when an amount is shown or compared against
cash handed over the counter.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from pos.domain.model.line_item import LineItem
from pos.domain.model.value_objects import ZERO, Money

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class BillTotals:
    subtotal: Money
    tax: Money
    total: Money


def compute_totals(items: Iterable[LineItem], tax_rate_percent: Decimal) -> BillTotals:
    """Subtotal of the line items plus tax at *tax_rate_percent*."""
    subtotal = Money.sum(item.line_total for item in items)
    tax = Money(subtotal.amount * Decimal(tax_rate_percent) / HUNDRED)
    return BillTotals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def compute_change(cash_received: Decimal, total: Decimal) -> Decimal:
    """Change owed to the customer, never negative.

    Rejecting a cash payment smaller than the total is the caller's job.
    """
    return max(ZERO, Decimal(cash_received) - Decimal(total))
