"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Amounts are
pre-formatted to two decimals.
"""

from __future__ import annotations

from dataclasses import dataclass

from pos.domain.formatting import format_amount
from pos.domain.model.customer import Customer
from pos.domain.model.transaction import Transaction

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class LineItemDTO:
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "199.00"
    line_total: str


@dataclass(frozen=True)
class TransactionDTO:
    id: str
    status: str
    payment_method: str
    items: list[LineItemDTO]
    subtotal: str
    tax: str
    total: str
    employee_name: str
    created_at: str
    customer_name: str | None = None
    customer_phone: str | None = None
    table_number: str | None = None


@dataclass(frozen=True)
class CheckoutResult:
    """Output of a successful checkout."""

    transaction: TransactionDTO
    receipt_text: str
    change: str


@dataclass(frozen=True)
class DashboardSummaryDTO:
    total_sales: str
    total_orders: int
    average_order_value: str
    most_popular_item: str
    recent_transactions: list[TransactionDTO]


@dataclass(frozen=True)
class CustomerDTO:
    id: str
    name: str
    phone: str
    visits: int
    last_visit: str


def to_transaction_dto(txn: Transaction) -> TransactionDTO:
    return TransactionDTO(
        id=txn.id or "",
        status=txn.status.value,
        payment_method=txn.payment_method.value,
        items=[
            LineItemDTO(
                name=item.name,
                quantity=item.quantity.value,
                unit_price=format_amount(item.unit_price.amount),
                line_total=format_amount(item.line_total.amount),
            )
            for item in txn.items
        ],
        subtotal=format_amount(txn.subtotal.amount),
        tax=format_amount(txn.tax.amount),
        total=format_amount(txn.total.amount),
        employee_name=txn.employee_name,
        created_at=_format_timestamp(txn),
        customer_name=txn.customer_name,
        customer_phone=txn.customer_phone,
        table_number=txn.table_number,
    )


def _format_timestamp(txn: Transaction) -> str:
    if txn.created_at is None:
        return "-"
    moment = txn.created_at
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.strftime(TIMESTAMP_FORMAT)


def to_customer_dto(customer: Customer) -> CustomerDTO:
    last = customer.updated_at or customer.created_at
    if last is not None and last.tzinfo is not None:
        last = last.astimezone()
    return CustomerDTO(
        id=customer.id,
        name=customer.name,
        phone=customer.phone,
        visits=customer.visits,
        last_visit=last.strftime(TIMESTAMP_FORMAT) if last is not None else "-",
    )
