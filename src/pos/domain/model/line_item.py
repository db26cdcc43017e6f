"""LineItem: a sold product frozen at the moment of sale."""

from __future__ import annotations

from dataclasses import dataclass

from pos.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class LineItem:
    """Captures the name and price of a menu item at sale time.

    Later edits to the menu never reach a line item, so historical bills
    keep printing what was actually charged.
    """

    product_id: str
    name: str
    unit_price: Money
    quantity: Quantity
    category_id: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def with_quantity(self, quantity: int) -> LineItem:
        return LineItem(
            product_id=self.product_id,
            name=self.name,
            unit_price=self.unit_price,
            quantity=Quantity(quantity),
            category_id=self.category_id,
        )
