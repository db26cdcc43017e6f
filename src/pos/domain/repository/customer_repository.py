"""Abstract repository for customers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique customer ID."""

    @abstractmethod
    def get_by_phone(self, restaurant_id: str, phone: str) -> Customer | None:
        """Return the restaurant's customer with this phone number, or None."""

    @abstractmethod
    def list_for_restaurant(self, restaurant_id: str) -> list[Customer]:
        """Return every customer of one restaurant, ordered by name."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new or updated customer."""
