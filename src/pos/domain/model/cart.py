"""Cart: the operator's in-progress order.

One cart per operator session.  The total is always derived from the
items; nothing stores it, so it cannot drift after a mutation.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pos.domain.model.line_item import LineItem
from pos.domain.model.menu_item import MenuItem
from pos.domain.model.settings import BillSettings
from pos.domain.model.value_objects import Money
from pos.domain.service.bill_calculator import BillTotals, compute_totals
from pos.domain.service.transaction_validator import normalize_optional_text


@dataclass
class Cart:
    settings: BillSettings = field(default_factory=BillSettings)
    items: list[LineItem] = field(default_factory=list)
    customer_name: str | None = None
    customer_phone: str | None = None
    table_number: str | None = None

    # --- Mutations ------------------------------------------------------------

    def add(self, menu_item: MenuItem, quantity: int = 1) -> None:
        """Add *quantity* of *menu_item*, merging with an existing line."""
        for index, item in enumerate(self.items):
            if item.product_id == menu_item.id:
                self.items[index] = item.with_quantity(item.quantity.value + quantity)
                return
        self.items.append(menu_item.to_line_item(quantity))

    def remove(self, product_id: str) -> None:
        self.items = [item for item in self.items if item.product_id != product_id]

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove(product_id)
            return
        self.items = [
            item.with_quantity(quantity) if item.product_id == product_id else item
            for item in self.items
        ]

    def set_customer_info(
        self,
        customer_name: str | None = None,
        customer_phone: str | None = None,
        table_number: str | None = None,
    ) -> None:
        self.customer_name = normalize_optional_text(customer_name)
        self.customer_phone = normalize_optional_text(customer_phone)
        self.table_number = normalize_optional_text(table_number)

    def clear(self) -> None:
        self.items = []
        self.customer_name = None
        self.customer_phone = None
        self.table_number = None

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        return Money.sum(item.line_total for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def totals(self) -> BillTotals:
        """Subtotal, tax and total at the configured tax rate."""
        return compute_totals(self.items, self.settings.tax_rate)
