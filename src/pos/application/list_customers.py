"""Application service: List Customers use case (query)."""

from __future__ import annotations

from pos.application.dto import CustomerDTO, to_customer_dto
from pos.domain.repository.customer_repository import CustomerRepository


class ListCustomersHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, restaurant_id: str) -> list[CustomerDTO]:
        return [
            to_customer_dto(customer)
            for customer in self._customer_repo.list_for_restaurant(restaurant_id)
        ]
