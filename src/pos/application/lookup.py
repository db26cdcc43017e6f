"""Resolve the transaction an operator refers to.

Listings and thermal receipts show shortened ids, so any unambiguous
prefix of an id is accepted wherever a full id is.
"""

from __future__ import annotations

from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.transaction import Transaction
from pos.domain.repository.transaction_repository import TransactionRepository


def load_transaction(repo: TransactionRepository, transaction_id: str) -> Transaction:
    transaction_id = transaction_id.strip()
    exact = repo.get_by_id(transaction_id) if transaction_id else None
    if exact is not None:
        return exact

    matches = repo.find_by_id_prefix(transaction_id) if transaction_id else []
    if not matches:
        raise EntityNotFoundError(f"Transaction {transaction_id} not found")
    if len(matches) > 1:
        raise ValidationError(
            f"Transaction id '{transaction_id}' is ambiguous: it matches "
            f"{len(matches)} transactions"
        )
    return matches[0]
