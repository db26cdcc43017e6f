"""Integration tests for the Checkout use case.

Uses in-memory fake repositories; no file I/O.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from pos.application.add_to_cart import AddToCartHandler
from pos.application.checkout import CheckoutHandler
from pos.domain.exceptions import EntityNotFoundError, PreconditionError, ValidationError
from pos.domain.model.cart import Cart
from pos.domain.model.menu_item import MenuItem
from pos.domain.model.settings import BillSettings
from pos.domain.model.transaction import Operator, PaymentMethod
from pos.domain.model.value_objects import Money
from tests.fakes import (
    FakeCustomerRepository,
    FakeMenuRepository,
    FakeTransactionRepository,
)

SETTINGS = BillSettings(restaurant_name="Spice Route", tax_rate=Decimal("18"))
OPERATOR = Operator(id="e1", name="Asha", restaurant_id="r1")
NOW = datetime(2026, 3, 11, 12, 30)


def _setup(
    settings: BillSettings = SETTINGS,
    customer_repo: FakeCustomerRepository | None = None,
) -> tuple[CheckoutHandler, Cart, FakeTransactionRepository]:
    """Cart pre-loaded with two Garlic Breads and a Coffee (subtotal 527)."""
    menu_repo = FakeMenuRepository([
        MenuItem(id="1", name="Garlic Bread", price=Money.of("199.00"), category_id="c1"),
        MenuItem(id="2", name="Coffee", price=Money.of("129.00"), category_id="c2"),
        MenuItem(id="3", name="Tiramisu", price=Money.of("220.00"), available=False),
    ])
    cart = Cart(settings=settings)
    add = AddToCartHandler(menu_repo)
    add.handle(cart, "Garlic Bread", 2)
    add.handle(cart, "coffee")
    txn_repo = FakeTransactionRepository()
    handler = CheckoutHandler(txn_repo, customer_repo or FakeCustomerRepository())
    return handler, cart, txn_repo


class TestCheckoutHappyPath:

    def test_records_transaction_with_tax(self):
        handler, cart, txn_repo = _setup()
        result = handler.handle(cart, "cash", OPERATOR, cash_received=Decimal("700"), now=NOW)

        assert result.transaction.subtotal == "527.00"
        assert result.transaction.tax == "94.86"
        assert result.transaction.total == "621.86"
        assert result.change == "78.14"

        saved = txn_repo.get_by_id(result.transaction.id)
        assert saved is not None
        assert saved.restaurant_id == "r1"
        assert saved.employee_id == "e1"
        assert saved.employee_name == "Asha"
        assert saved.created_at == NOW

    def test_receipt_is_rendered(self):
        handler, cart, _ = _setup()
        result = handler.handle(cart, "card", OPERATOR, now=NOW)
        assert "Spice Route" in result.receipt_text
        assert "Payment: Card" in result.receipt_text
        assert "₹621.86" in result.receipt_text

    def test_cart_is_cleared(self):
        handler, cart, _ = _setup()
        cart.set_customer_info("Ravi", None, "4")
        handler.handle(cart, PaymentMethod.CARD, OPERATOR, now=NOW)
        assert cart.is_empty
        assert cart.table_number is None

    def test_customer_details_are_recorded(self):
        handler, cart, txn_repo = _setup()
        cart.set_customer_info(" Ravi ", "98765", "4")
        result = handler.handle(cart, "card", OPERATOR, now=NOW)
        saved = txn_repo.get_by_id(result.transaction.id)
        assert (saved.customer_name, saved.customer_phone, saved.table_number) == ("Ravi", "98765", "4")

    def test_exact_cash_gives_zero_change(self):
        handler, cart, _ = _setup()
        result = handler.handle(cart, "cash", OPERATOR, cash_received=Decimal("621.86"), now=NOW)
        assert result.change == "0.00"

    def test_cash_without_amount_records_sale(self):
        handler, cart, txn_repo = _setup()
        result = handler.handle(cart, "cash", OPERATOR, now=NOW)
        assert result.change == "0.00"
        assert txn_repo.get_by_id(result.transaction.id) is not None


    def test_receipt_uses_the_carts_settings(self):
        settings = BillSettings(
            restaurant_name="Cafe Nine",
            tax_rate=Decimal("5"),
            currency_symbol="$",
        )
        handler, cart, _ = _setup(settings=settings)
        result = handler.handle(cart, "card", OPERATOR, now=NOW)

        assert result.transaction.tax == "26.35"
        assert "Cafe Nine" in result.receipt_text
        assert "Spice Route" not in result.receipt_text
        assert "Tax (5%):" in result.receipt_text
        assert "$553.35" in result.receipt_text


class TestCheckoutCustomers:

    def test_first_visit_creates_customer(self):
        customers = FakeCustomerRepository()
        handler, cart, _ = _setup(customer_repo=customers)
        cart.set_customer_info("Ravi", "98765", None)
        handler.handle(cart, "card", OPERATOR, now=NOW)

        customer = customers.get_by_phone("r1", "98765")
        assert customer is not None
        assert customer.name == "Ravi"
        assert customer.visits == 1
        assert customer.created_at == NOW
        assert customer.updated_at == NOW

    def test_repeat_phone_updates_the_same_customer(self):
        customers = FakeCustomerRepository()
        handler, cart, _ = _setup(customer_repo=customers)
        cart.set_customer_info("Ravi", "98765", None)
        handler.handle(cart, "card", OPERATOR, now=NOW)

        later = datetime(2026, 3, 12, 20, 0)
        handler2, cart2, _ = _setup(customer_repo=customers)
        cart2.set_customer_info("Ravi Kumar", "98765", None)
        handler2.handle(cart2, "card", OPERATOR, now=later)

        rows = customers.list_for_restaurant("r1")
        assert len(rows) == 1
        assert rows[0].name == "Ravi Kumar"
        assert rows[0].visits == 2
        assert rows[0].created_at == NOW
        assert rows[0].updated_at == later

    def test_no_phone_means_no_customer(self):
        customers = FakeCustomerRepository()
        handler, cart, _ = _setup(customer_repo=customers)
        cart.set_customer_info("Ravi", None, "4")
        handler.handle(cart, "card", OPERATOR, now=NOW)
        assert customers.list_for_restaurant("r1") == []

    def test_unnamed_customer_is_anonymous(self):
        customers = FakeCustomerRepository()
        handler, cart, _ = _setup(customer_repo=customers)
        cart.set_customer_info("  ", "98765", None)
        handler.handle(cart, "card", OPERATOR, now=NOW)
        assert customers.get_by_phone("r1", "98765").name == "Anonymous"

    def test_rejected_checkout_records_no_customer(self):
        customers = FakeCustomerRepository()
        handler, cart, _ = _setup(customer_repo=customers)
        cart.set_customer_info("Ravi", "98765", None)
        with pytest.raises(PreconditionError):
            handler.handle(cart, "cash", OPERATOR, cash_received=Decimal("1"), now=NOW)
        assert customers.list_for_restaurant("r1") == []


class TestCheckoutRejections:

    def test_empty_cart(self):
        handler, _, _ = _setup()
        with pytest.raises(PreconditionError, match="Cart is empty"):
            handler.handle(Cart(settings=SETTINGS), "cash", OPERATOR, now=NOW)

    def test_insufficient_cash(self):
        handler, cart, txn_repo = _setup()
        with pytest.raises(PreconditionError, match="less than the total 621.86"):
            handler.handle(cart, "cash", OPERATOR, cash_received=Decimal("600"), now=NOW)
        assert txn_repo.list_for_restaurant("r1") == []
        assert not cart.is_empty

    def test_unknown_payment_method(self):
        handler, cart, _ = _setup()
        with pytest.raises(ValidationError, match="payment method"):
            handler.handle(cart, "cheque", OPERATOR, now=NOW)


class TestAddToCart:

    def test_unknown_item(self):
        _, cart, _ = _setup()
        handler = AddToCartHandler(FakeMenuRepository())
        with pytest.raises(EntityNotFoundError, match="Menu item not found"):
            handler.handle(cart, "Dosa")

    def test_unavailable_item(self):
        menu_repo = FakeMenuRepository([
            MenuItem(id="3", name="Tiramisu", price=Money.of("220.00"), available=False),
        ])
        with pytest.raises(ValidationError, match="not available"):
            AddToCartHandler(menu_repo).handle(Cart(), "Tiramisu")

    def test_price_is_locked_when_added(self):
        item = MenuItem(id="1", name="Margherita", price=Money.of("499.00"))
        menu_repo = FakeMenuRepository([item])
        cart = Cart()
        AddToCartHandler(menu_repo).handle(cart, "Margherita")
        item.update_price(Money.of("549.00"))
        assert cart.items[0].unit_price == Money.of("499.00")
