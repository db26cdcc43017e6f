"""Abstract repository for the Transaction aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.transaction import Transaction


class TransactionRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique transaction ID."""

    @abstractmethod
    def get_by_id(self, transaction_id: str) -> Transaction | None:
        """Return a transaction by its ID, or None if not found."""

    @abstractmethod
    def find_by_id_prefix(self, prefix: str) -> list[Transaction]:
        """Return every transaction whose ID starts with *prefix*."""

    @abstractmethod
    def list_for_restaurant(self, restaurant_id: str) -> list[Transaction]:
        """Return every transaction of one restaurant, newest first."""

    @abstractmethod
    def save(self, transaction: Transaction) -> None:
        """Persist a new or updated transaction."""

    @abstractmethod
    def delete(self, transaction_id: str) -> None:
        """Remove a transaction permanently (administrative override)."""
