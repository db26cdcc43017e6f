"""Application service: Add Menu Item use case."""

from __future__ import annotations

from pos.domain.exceptions import ValidationError
from pos.domain.model.menu_item import MenuItem
from pos.domain.model.value_objects import Money
from pos.domain.repository.menu_repository import CategoryRepository, MenuRepository


class AddMenuItemHandler:

    def __init__(
        self,
        menu_repo: MenuRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._menu_repo = menu_repo
        self._category_repo = category_repo

    def handle(
        self,
        name: str,
        price: str,
        category_id: str | None = None,
        description: str = "",
    ) -> MenuItem:
        """Add a new item to the menu."""
        if not name or not name.strip():
            raise ValidationError("Menu item name is required")

        existing = self._menu_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Menu item '{name.strip()}' already exists")

        if category_id is not None and self._category_repo.get_by_id(category_id) is None:
            raise ValidationError(f"Unknown category '{category_id}'")

        amount = Money.of(price)
        if amount.amount <= 0:
            raise ValidationError("Menu item price must be greater than zero")

        # Auto-assign ID based on existing items
        all_items = self._menu_repo.list_all()
        numeric_ids = [int(item.id) for item in all_items if item.id.isdigit()]
        next_id = str(max(numeric_ids) + 1) if numeric_ids else "1"

        item = MenuItem(
            id=next_id,
            name=name.strip(),
            price=amount,
            category_id=category_id,
            description=description.strip(),
        )
        self._menu_repo.save(item)
        return item
