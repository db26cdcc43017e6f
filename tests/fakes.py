"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterator

from pos.domain.model.customer import Customer
from pos.domain.model.menu_item import Category, MenuItem
from pos.domain.model.transaction import Transaction
from pos.domain.repository.change_feed import ChangeFeed
from pos.domain.repository.customer_repository import CustomerRepository
from pos.domain.repository.menu_repository import CategoryRepository, MenuRepository
from pos.domain.repository.transaction_repository import TransactionRepository


class FakeTransactionRepository(TransactionRepository):

    def __init__(self, transactions: list[Transaction] | None = None) -> None:
        self._store: dict[str, Transaction] = {}
        self._counter = 0
        for txn in transactions or []:
            self.save(txn)

    def next_id(self) -> str:
        self._counter += 1
        return f"txn{self._counter:05d}"

    def get_by_id(self, transaction_id: str) -> Transaction | None:
        return self._store.get(transaction_id)

    def find_by_id_prefix(self, prefix: str) -> list[Transaction]:
        return [t for t in self._store.values() if t.id.startswith(prefix)]

    def list_for_restaurant(self, restaurant_id: str) -> list[Transaction]:
        oldest = datetime.min.replace(tzinfo=timezone.utc)

        def key(txn: Transaction) -> datetime:
            if txn.created_at is None:
                return oldest
            if txn.created_at.tzinfo is None:
                return txn.created_at.astimezone()
            return txn.created_at

        matches = [t for t in self._store.values() if t.restaurant_id == restaurant_id]
        return sorted(matches, key=key, reverse=True)

    def save(self, transaction: Transaction) -> None:
        if transaction.id is None:
            transaction.id = self.next_id()
        self._store[transaction.id] = transaction

    def delete(self, transaction_id: str) -> None:
        self._store.pop(transaction_id, None)


class FakeMenuRepository(MenuRepository):

    def __init__(self, items: list[MenuItem] | None = None) -> None:
        self._store: dict[str, MenuItem] = {}
        for item in items or []:
            self._store[item.id] = item

    def get_by_id(self, item_id: str) -> MenuItem | None:
        return self._store.get(item_id)

    def get_by_name(self, name: str) -> MenuItem | None:
        for item in self._store.values():
            if item.name.lower() == name.lower():
                return item
        return None

    def list_all(self) -> list[MenuItem]:
        return list(self._store.values())

    def save(self, item: MenuItem) -> None:
        self._store[item.id] = item


class FakeCategoryRepository(CategoryRepository):

    def __init__(self, categories: list[Category] | None = None) -> None:
        self._store = {c.id: c for c in categories or []}

    def get_by_id(self, category_id: str) -> Category | None:
        return self._store.get(category_id)

    def list_all(self) -> list[Category]:
        return list(self._store.values())


class FakeCustomerRepository(CustomerRepository):

    def __init__(self) -> None:
        self._store: dict[str, Customer] = {}
        self._counter = 0

    def next_id(self) -> str:
        self._counter += 1
        return f"cust-{self._counter}"

    def get_by_phone(self, restaurant_id: str, phone: str) -> Customer | None:
        for customer in self._store.values():
            if customer.restaurant_id == restaurant_id and customer.phone == phone:
                return customer
        return None

    def list_for_restaurant(self, restaurant_id: str) -> list[Customer]:
        found = [c for c in self._store.values() if c.restaurant_id == restaurant_id]
        return sorted(found, key=lambda c: c.name.lower())

    def save(self, customer: Customer) -> None:
        self._store[customer.id] = customer


class FakeChangeFeed(ChangeFeed[Transaction]):
    """Replays a fixed list of snapshots."""

    def __init__(self, snapshots: list[list[Transaction]]) -> None:
        self._snapshots = snapshots

    def snapshots(self) -> Iterator[list[Transaction]]:
        yield from (list(snapshot) for snapshot in self._snapshots)
