"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

import uuid
from pathlib import Path

from pos.domain.model.customer import ANONYMOUS, Customer
from pos.domain.model.transaction import parse_timestamp
from pos.domain.repository.customer_repository import CustomerRepository
from pos.infrastructure.persistence.json_file import ensure_json_file, read_json, write_json


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_json_file(file_path, [])

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_phone(self, restaurant_id: str, phone: str) -> Customer | None:
        for raw in read_json(self._file_path):
            if raw.get("restaurant_id") == restaurant_id and raw.get("phone") == phone:
                return self._to_domain(raw)
        return None

    def list_for_restaurant(self, restaurant_id: str) -> list[Customer]:
        customers = [
            self._to_domain(raw)
            for raw in read_json(self._file_path)
            if raw.get("restaurant_id") == restaurant_id
        ]
        customers.sort(key=lambda c: c.name.lower())
        return customers

    def save(self, customer: Customer) -> None:
        records = [raw for raw in read_json(self._file_path) if raw["id"] != customer.id]
        records.append(self._to_raw(customer))
        write_json(self._file_path, records)

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "id": customer.id,
            "restaurant_id": customer.restaurant_id,
            "phone": customer.phone,
            "name": customer.name,
            "visits": customer.visits,
            "created_at": customer.created_at.isoformat() if customer.created_at else None,
            "updated_at": customer.updated_at.isoformat() if customer.updated_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            restaurant_id=raw["restaurant_id"],
            phone=raw["phone"],
            name=raw.get("name") or ANONYMOUS,
            visits=raw.get("visits", 0),
            created_at=parse_timestamp(raw.get("created_at")),
            updated_at=parse_timestamp(raw.get("updated_at")),
        )
