"""MenuItem aggregate and its Category lookup.

Menu items live independently of transactions. They have their own
lifecycle: prices change, dishes are added and taken off the menu.
"""

from __future__ import annotations

from dataclasses import dataclass

from pos.domain.exceptions import ValidationError
from pos.domain.model.line_item import LineItem
from pos.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class Category:
    """A menu section such as "Starters" or "Beverages"."""

    id: str
    name: str


@dataclass
class MenuItem:
    """A dish or drink on the menu.

    Kept as a mutable dataclass because price and availability updates
    are legitimate mutations on the aggregate.
    """

    id: str
    name: str
    price: Money
    category_id: str | None = None
    description: str = ""
    available: bool = True

    def update_price(self, new_price: Money) -> None:
        """Change the menu price.

        This does NOT affect any recorded transaction because line items
        capture a price snapshot at sale time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Menu item price must be greater than zero")
        self.price = new_price

    def to_line_item(self, quantity: int = 1) -> LineItem:
        return LineItem(
            product_id=self.id,
            name=self.name,
            unit_price=self.price,
            quantity=Quantity(quantity),
            category_id=self.category_id,
        )
