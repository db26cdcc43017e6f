"""Domain service: Transaction Validator.

Every transaction passes through ``validate_transaction`` before it is
handed to a repository, so storage never sees a half-checked record.
Validation fails fast on the first problem with a message the operator
can act on.  The only silent corrections are to optional free-text
fields, which are trimmed and blanked to ``None``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from pos.domain.exceptions import BusinessRuleViolation, ValidationError
from pos.domain.model.line_item import LineItem
from pos.domain.model.transaction import (
    TOTAL_TOLERANCE,
    Transaction,
    TransactionStatus,
    parse_payment_method,
    parse_status,
    parse_timestamp,
)
from pos.domain.model.value_objects import Money, Quantity


def normalize_optional_text(value: Any) -> str | None:
    """Trim a human-entered field; empty or missing becomes ``None``."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def validate_transaction(candidate: Mapping[str, Any]) -> Transaction:
    """Check a candidate transaction and build the aggregate from it.

    Raises ValidationError describing the first rule that fails.
    """
    restaurant_id = normalize_optional_text(candidate.get("restaurant_id"))
    if restaurant_id is None:
        raise ValidationError("Transaction must belong to a restaurant")

    employee_name = normalize_optional_text(candidate.get("employee_name"))
    if employee_name is None:
        raise ValidationError("Transaction must record the employee who made the sale")

    raw_items = candidate.get("items") or []
    if not raw_items:
        raise ValidationError("Transaction must contain at least one item")
    items = [_validate_item(raw, position) for position, raw in enumerate(raw_items, 1)]

    subtotal = _parse_amount(candidate.get("subtotal"), "Transaction subtotal")
    tax = _parse_amount(candidate.get("tax"), "Transaction tax")
    total = _parse_amount(candidate.get("total"), "Transaction total")
    if abs(subtotal + tax - total) > TOTAL_TOLERANCE:
        raise ValidationError(
            f"Total {total} does not equal subtotal {subtotal} plus tax {tax}"
        )

    payment_method = parse_payment_method(candidate.get("payment_method"))
    status = parse_status(candidate.get("status", TransactionStatus.COMPLETED.value))

    created_at = datetime.now(timezone.utc)
    if candidate.get("created_at") is not None:
        created_at = parse_timestamp(candidate["created_at"])
        if created_at is None:
            raise ValidationError(
                f"Unreadable creation time {candidate['created_at']!r}"
            )

    return Transaction(
        id=normalize_optional_text(candidate.get("id")),
        restaurant_id=restaurant_id,
        items=items,
        subtotal=Money(subtotal),
        tax=Money(tax),
        total=Money(total),
        payment_method=payment_method,
        status=status,
        employee_id=normalize_optional_text(candidate.get("employee_id")),
        employee_name=employee_name,
        customer_name=normalize_optional_text(candidate.get("customer_name")),
        customer_phone=normalize_optional_text(candidate.get("customer_phone")),
        table_number=normalize_optional_text(candidate.get("table_number")),
        created_at=created_at,
        updated_at=created_at,
    )


def validate_status_change(
    transaction: Transaction, new_status: Any, now: datetime
) -> TransactionStatus:
    """Check that *transaction* may move to *new_status* at *now*.

    Returns the parsed status.  An unknown status is a ValidationError;
    a transaction from another day is a BusinessRuleViolation whatever
    status was requested.
    """
    status = parse_status(new_status)
    if not transaction.is_editable_on(now):
        raise BusinessRuleViolation(
            f"Transaction {transaction.id} can only change status on the day "
            f"it was created"
        )
    return status


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _validate_item(raw: LineItem | Mapping[str, Any], position: int) -> LineItem:
    if isinstance(raw, LineItem):
        return raw
    if not isinstance(raw, Mapping):
        raise ValidationError(f"Item #{position} is not a line item")

    name = normalize_optional_text(raw.get("name"))
    if name is None:
        raise ValidationError(f"Item #{position} has no name")

    quantity = raw.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(f"Item '{name}' quantity must be a whole number")
    if quantity < 1:
        raise ValidationError(f"Item '{name}' quantity must be at least 1")

    unit_price = _parse_amount(raw.get("unit_price"), f"Item '{name}' unit price")

    return LineItem(
        product_id=str(raw.get("product_id") or ""),
        name=name,
        unit_price=Money(unit_price),
        quantity=Quantity(quantity),
        category_id=normalize_optional_text(raw.get("category_id")),
    )


def _parse_amount(value: Any, label: str) -> Decimal:
    if isinstance(value, Money):
        return value.amount
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{label} is required")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{label} is not a number: {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(f"{label} is not a number: {value!r}")
    if amount < 0:
        raise ValidationError(f"{label} cannot be negative")
    return amount
