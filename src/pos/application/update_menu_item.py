"""Application service: Update Menu Item use case."""

from __future__ import annotations

from pos.domain.exceptions import EntityNotFoundError
from pos.domain.model.value_objects import Money
from pos.domain.repository.menu_repository import MenuRepository


class UpdateMenuItemHandler:

    def __init__(self, menu_repo: MenuRepository) -> None:
        self._menu_repo = menu_repo

    def handle(
        self,
        item_id: str,
        new_price: str | None = None,
        available: bool | None = None,
    ) -> None:
        """Change an item's price and/or availability.

        This does NOT affect any recorded transaction; they captured a
        price snapshot at sale time.
        """
        item = self._menu_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Menu item with ID '{item_id}' not found")

        if new_price is not None:
            item.update_price(Money.of(new_price))
        if available is not None:
            item.available = available
        self._menu_repo.save(item)
