"""JSON-file-backed implementation of TransactionRepository."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from pos.domain.model.line_item import LineItem
from pos.domain.model.transaction import (
    PaymentMethod,
    Transaction,
    TransactionStatus,
    parse_timestamp,
)
from pos.domain.model.value_objects import Money, Quantity
from pos.domain.repository.transaction_repository import TransactionRepository
from pos.infrastructure.persistence.file_change_feed import FileChangeFeed
from pos.infrastructure.persistence.json_file import ensure_json_file, read_json, write_json

# Timestamp-less records sort after everything else.
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class JsonTransactionRepository(TransactionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_json_file(file_path, [])

    # --- TransactionRepository interface --------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, transaction_id: str) -> Transaction | None:
        for raw in self._load_raw():
            if raw["id"] == transaction_id:
                return self._to_domain(raw)
        return None

    def find_by_id_prefix(self, prefix: str) -> list[Transaction]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if str(raw["id"]).startswith(prefix)
        ]

    def list_for_restaurant(self, restaurant_id: str) -> list[Transaction]:
        transactions = [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw.get("restaurant_id") == restaurant_id
        ]
        transactions.sort(key=_newest_first_key, reverse=True)
        return transactions

    def save(self, transaction: Transaction) -> None:
        records = self._load_raw()

        if transaction.id is None:
            transaction.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == transaction.id:
                records[i] = self._to_raw(transaction)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(transaction))

        self._persist_raw(records)

    def delete(self, transaction_id: str) -> None:
        records = [raw for raw in self._load_raw() if raw["id"] != transaction_id]
        self._persist_raw(records)

    def change_feed(self, restaurant_id: str, **options) -> FileChangeFeed[Transaction]:
        """Snapshots of one restaurant's transactions, refreshed on every write."""
        return FileChangeFeed(
            self._file_path,
            lambda: self.list_for_restaurant(restaurant_id),
            **options,
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(txn: Transaction) -> dict:
        return {
            "id": txn.id,
            "restaurant_id": txn.restaurant_id,
            "status": txn.status.value,
            "payment_method": txn.payment_method.value,
            "subtotal": str(txn.subtotal.amount),
            "tax": str(txn.tax.amount),
            "total": str(txn.total.amount),
            "customer_name": txn.customer_name,
            "customer_phone": txn.customer_phone,
            "table_number": txn.table_number,
            "employee_id": txn.employee_id,
            "employee_name": txn.employee_name,
            "created_at": txn.created_at.isoformat() if txn.created_at else None,
            "updated_at": txn.updated_at.isoformat() if txn.updated_at else None,
            "items": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "unit_price": str(item.unit_price.amount),
                    "quantity": item.quantity.value,
                    "category_id": item.category_id,
                }
                for item in txn.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Transaction:
        items = [
            LineItem(
                product_id=i.get("product_id", ""),
                name=i["name"],
                unit_price=Money(Decimal(str(i["unit_price"]))),
                quantity=Quantity(i["quantity"]),
                category_id=i.get("category_id"),
            )
            for i in raw.get("items", [])
        ]
        return Transaction(
            id=raw["id"],
            restaurant_id=raw["restaurant_id"],
            items=items,
            subtotal=Money(Decimal(str(raw["subtotal"]))),
            tax=Money(Decimal(str(raw["tax"]))),
            total=Money(Decimal(str(raw["total"]))),
            payment_method=PaymentMethod(raw["payment_method"]),
            status=TransactionStatus(raw["status"]),
            customer_name=raw.get("customer_name"),
            customer_phone=raw.get("customer_phone"),
            table_number=raw.get("table_number"),
            employee_id=raw.get("employee_id"),
            employee_name=raw.get("employee_name", ""),
            # Unreadable timestamps are kept as None; reports skip such records.
            created_at=parse_timestamp(raw.get("created_at")),
            updated_at=parse_timestamp(raw.get("updated_at")),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return read_json(self._file_path)

    def _persist_raw(self, records: list[dict]) -> None:
        write_json(self._file_path, records)


def _newest_first_key(txn: Transaction) -> datetime:
    if txn.created_at is None:
        return _OLDEST
    if txn.created_at.tzinfo is None:
        return txn.created_at.astimezone()
    return txn.created_at
