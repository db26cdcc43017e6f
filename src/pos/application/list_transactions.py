"""Application service: List Transactions use case (query).

Search matches the transaction id, customer name or employee name,
case-insensitively.  Filters and sort options mirror the transactions
screen.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from pos.application.dto import TransactionDTO, to_transaction_dto
from pos.domain.exceptions import ValidationError
from pos.domain.model.transaction import (
    Transaction,
    parse_payment_method,
    parse_status,
)
from pos.domain.repository.transaction_repository import TransactionRepository

SORT_FIELDS = ("created_at", "total")

# Records without a timestamp sort as the oldest.
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class TransactionQuery:
    search: str = ""
    status: str | None = None
    payment_method: str | None = None
    sort_by: str = "created_at"
    descending: bool = True


class ListTransactionsHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(
        self,
        restaurant_id: str,
        query: TransactionQuery | None = None,
    ) -> list[TransactionDTO]:
        query = query or TransactionQuery()
        if query.sort_by not in SORT_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{query.sort_by}' (expected one of: {', '.join(SORT_FIELDS)})"
            )
        status = parse_status(query.status) if query.status else None
        method = parse_payment_method(query.payment_method) if query.payment_method else None
        needle = query.search.strip().lower()

        matches = [
            txn
            for txn in self._transaction_repo.list_for_restaurant(restaurant_id)
            if (status is None or txn.status is status)
            and (method is None or txn.payment_method is method)
            and (not needle or _matches_search(txn, needle))
        ]

        if query.sort_by == "total":
            matches.sort(key=lambda txn: txn.total.amount, reverse=query.descending)
        else:
            matches.sort(key=_sortable_created_at, reverse=query.descending)
        return [to_transaction_dto(txn) for txn in matches]


def _matches_search(txn: Transaction, needle: str) -> bool:
    haystacks = (txn.id, txn.customer_name, txn.employee_name)
    return any(needle in value.lower() for value in haystacks if value)


def _sortable_created_at(txn: Transaction) -> datetime:
    if txn.created_at is None:
        return _EPOCH
    if txn.created_at.tzinfo is None:
        return txn.created_at.astimezone()
    return txn.created_at
