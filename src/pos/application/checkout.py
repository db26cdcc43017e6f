"""Application service: Checkout use case.

Turns the operator's cart into a recorded transaction:

1. Check preconditions (non-empty cart, enough cash tendered).
2. Compute totals at the configured tax rate.
3. Validate the candidate transaction and persist it.
4. Remember the customer when the bill carries a phone number.
5. Render the thermal receipt with the cart's settings and clear the cart.

The write is a single unit: if validation or the repository fails the
cart is left untouched so the operator can retry.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import structlog

from pos.application.dto import CheckoutResult, to_transaction_dto
from pos.domain.exceptions import PreconditionError
from pos.domain.formatting import format_amount, round_money
from pos.domain.model.cart import Cart
from pos.domain.model.customer import Customer
from pos.domain.model.transaction import (
    Operator,
    PaymentMethod,
    Transaction,
    parse_payment_method,
)
from pos.domain.model.value_objects import ZERO
from pos.domain.repository.customer_repository import CustomerRepository
from pos.domain.repository.transaction_repository import TransactionRepository
from pos.domain.service.bill_calculator import compute_change
from pos.domain.service.receipt_formatter import FinalizedBill, render_thermal_receipt
from pos.domain.service.transaction_validator import validate_transaction

logger = structlog.get_logger()


class CheckoutHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._customer_repo = customer_repo

    def handle(
        self,
        cart: Cart,
        payment_method: str | PaymentMethod,
        operator: Operator,
        cash_received: Decimal | None = None,
        now: datetime | None = None,
    ) -> CheckoutResult:
        if cart.is_empty:
            raise PreconditionError("Cart is empty")

        method = parse_payment_method(payment_method)
        totals = cart.totals()
        amount_due = round_money(totals.total.amount)

        change = ZERO
        if method is PaymentMethod.CASH and cash_received is not None:
            if Decimal(cash_received) < amount_due:
                raise PreconditionError(
                    f"Cash received {format_amount(Decimal(cash_received))} is less than "
                    f"the total {format_amount(amount_due)}"
                )
            change = compute_change(cash_received, amount_due)

        created_at = now or datetime.now(timezone.utc)
        txn = validate_transaction(
            {
                "id": self._transaction_repo.next_id(),
                "restaurant_id": operator.restaurant_id,
                "items": list(cart.items),
                "subtotal": totals.subtotal,
                "tax": totals.tax,
                "total": totals.total,
                "payment_method": method,
                "status": "completed",
                "customer_name": cart.customer_name,
                "customer_phone": cart.customer_phone,
                "table_number": cart.table_number,
                "employee_id": operator.id,
                "employee_name": operator.name,
                "created_at": created_at,
            }
        )
        self._transaction_repo.save(txn)
        logger.info(
            "transaction_recorded",
            transaction_id=txn.id,
            restaurant_id=txn.restaurant_id,
            total=format_amount(txn.total.amount),
            payment_method=method.value,
        )

        self._remember_customer(txn)

        receipt = render_thermal_receipt(cart.settings, FinalizedBill.from_transaction(txn))
        cart.clear()

        return CheckoutResult(
            transaction=to_transaction_dto(txn),
            receipt_text=receipt,
            change=format_amount(change),
        )

    def _remember_customer(self, txn: Transaction) -> None:
        if txn.customer_phone is None:
            return
        customer = self._customer_repo.get_by_phone(txn.restaurant_id, txn.customer_phone)
        if customer is None:
            customer = Customer(
                id=self._customer_repo.next_id(),
                restaurant_id=txn.restaurant_id,
                phone=txn.customer_phone,
                created_at=txn.created_at,
            )
        customer.record_visit(txn.customer_name, txn.created_at)
        self._customer_repo.save(customer)
        logger.info(
            "customer_recorded",
            customer_id=customer.id,
            transaction_id=txn.id,
            visits=customer.visits,
        )
