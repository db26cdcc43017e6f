"""Transaction aggregate: a completed sale and its bill.

A transaction is written once at checkout.  Its status is the only field
that may change afterwards, and only on the calendar day it was created.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from pos.domain.exceptions import BusinessRuleViolation, ValidationError
from pos.domain.model.line_item import LineItem
from pos.domain.model.value_objects import Money

# Largest allowed gap between subtotal + tax and the stored total.
TOTAL_TOLERANCE = Decimal("0.01")


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"
    OTHER = "other"


class TransactionStatus(Enum):
    COMPLETED = "completed"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Operator:
    """The signed-in employee who rings up sales."""

    id: str
    name: str
    restaurant_id: str


@dataclass
class Transaction:
    """Aggregate root for recorded sales.

    New transactions should come out of ``validate_transaction`` which
    enforces every rule; ``__init__`` stays simple so repositories can
    reconstitute stored records, including ones with a ``created_at`` that
    could not be parsed (``None``).
    """

    id: str | None
    restaurant_id: str
    items: list[LineItem]
    subtotal: Money
    tax: Money
    total: Money
    payment_method: PaymentMethod
    employee_name: str
    status: TransactionStatus = TransactionStatus.COMPLETED
    employee_id: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    table_number: str | None = None
    created_at: datetime | None = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: TransactionStatus, now: datetime) -> None:
        """Move the transaction to *new_status*.

        Only allowed while *now* falls on the local calendar day the
        transaction was created.
        """
        if not self.is_editable_on(now):
            created = to_local_date(self.created_at) if self.created_at else None
            raise BusinessRuleViolation(
                f"Transaction {self.id} was created on {created or 'an unknown date'}; "
                f"its status can only be changed on the day it was created"
            )
        self.status = new_status
        self.updated_at = now

    def is_editable_on(self, now: datetime) -> bool:
        if self.created_at is None:
            return False
        return to_local_date(self.created_at) == to_local_date(now)

    # --- Computed properties --------------------------------------------------

    @property
    def items_subtotal(self) -> Money:
        return Money.sum(item.line_total for item in self.items)

    @property
    def is_balanced(self) -> bool:
        drift = self.subtotal.amount + self.tax.amount - self.total.amount
        return abs(drift) <= TOTAL_TOLERANCE

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)


# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------


def to_local_date(moment: datetime) -> date:
    """Calendar date of *moment* in local time (naive values are already local)."""
    if moment.tzinfo is not None:
        return moment.astimezone().date()
    return moment.date()


def parse_timestamp(value: Any) -> datetime | None:
    """Best-effort conversion of a stored timestamp, or None if unusable.

    Accepts datetimes, ISO-8601 strings (with or without a trailing ``Z``),
    epoch seconds and document-store timestamp mappings
    (``{"seconds": ..., "nanoseconds": ...}``).
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _from_epoch(value)
    if isinstance(value, dict) and "seconds" in value:
        seconds = value.get("seconds")
        nanos = value.get("nanoseconds", 0) or 0
        if isinstance(seconds, (int, float)) and isinstance(nanos, (int, float)):
            return _from_epoch(seconds + nanos / 1_000_000_000)
        return None
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def _from_epoch(seconds: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def parse_payment_method(value: Any) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(
            f"Unknown payment method {value!r} (expected one of: {allowed})"
        ) from None


def parse_status(value: Any) -> TransactionStatus:
    if isinstance(value, TransactionStatus):
        return value
    try:
        return TransactionStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in TransactionStatus)
        raise ValidationError(
            f"Unknown transaction status {value!r} (expected one of: {allowed})"
        ) from None
