"""Abstract repositories for the menu: items and their categories.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, document store,
in-memory) live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.menu_item import Category, MenuItem


class MenuRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> MenuItem | None:
        """Return a menu item by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> MenuItem | None:
        """Return a menu item by name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[MenuItem]:
        """Return every item on the menu."""

    @abstractmethod
    def save(self, item: MenuItem) -> None:
        """Persist a new or updated menu item."""


class CategoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, category_id: str) -> Category | None:
        """Return a category by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category."""
