"""Application service: Add To Cart use case.

Resolves a menu item by name and adds it to the operator's cart at the
current menu price (the line item keeps that price from then on).
"""

from __future__ import annotations

from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.cart import Cart
from pos.domain.repository.menu_repository import MenuRepository


class AddToCartHandler:

    def __init__(self, menu_repo: MenuRepository) -> None:
        self._menu_repo = menu_repo

    def handle(self, cart: Cart, item_name: str, quantity: int = 1) -> None:
        item = self._menu_repo.get_by_name(item_name)
        if item is None:
            raise EntityNotFoundError(f"Menu item not found: '{item_name}'")
        if not item.available:
            raise ValidationError(f"'{item.name}' is not available right now")
        cart.add(item, quantity)
