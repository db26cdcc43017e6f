"""JSON-file-backed implementations of MenuRepository and CategoryRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from pos.domain.model.menu_item import Category, MenuItem
from pos.domain.model.value_objects import Money
from pos.domain.repository.menu_repository import CategoryRepository, MenuRepository
from pos.infrastructure.persistence.json_file import ensure_json_file, read_json, write_json


class JsonMenuRepository(MenuRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_json_file(file_path, [])

    # --- MenuRepository interface ---------------------------------------------

    def get_by_id(self, item_id: str) -> MenuItem | None:
        return self._load().get(item_id)

    def get_by_name(self, name: str) -> MenuItem | None:
        for item in self._load().values():
            if item.name.lower() == name.strip().lower():
                return item
        return None

    def list_all(self) -> list[MenuItem]:
        return list(self._load().values())

    def save(self, item: MenuItem) -> None:
        items = self._load()
        items[item.id] = item
        self._persist(items)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, MenuItem]:
        raw = read_json(self._file_path)
        return {
            entry["id"]: MenuItem(
                id=entry["id"],
                name=entry["name"],
                price=Money(Decimal(str(entry["price"]))),
                category_id=entry.get("category_id"),
                description=entry.get("description", ""),
                available=entry.get("available", True),
            )
            for entry in raw
        }

    def _persist(self, items: dict[str, MenuItem]) -> None:
        raw = [
            {
                "id": item.id,
                "name": item.name,
                "price": str(item.price.amount),
                "category_id": item.category_id,
                "description": item.description,
                "available": item.available,
            }
            for item in items.values()
        ]
        write_json(self._file_path, raw)


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_json_file(file_path, [])

    def get_by_id(self, category_id: str) -> Category | None:
        for category in self.list_all():
            if category.id == category_id:
                return category
        return None

    def list_all(self) -> list[Category]:
        raw = read_json(self._file_path)
        return [Category(id=entry["id"], name=entry["name"]) for entry in raw]

