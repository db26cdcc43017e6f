"""Application service: Delete Transaction use case (administrative override)."""

from __future__ import annotations

import structlog

from pos.application.lookup import load_transaction
from pos.domain.repository.transaction_repository import TransactionRepository

logger = structlog.get_logger()


class DeleteTransactionHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(self, transaction_id: str) -> str:
        txn = load_transaction(self._transaction_repo, transaction_id)
        self._transaction_repo.delete(txn.id)
        logger.warning("transaction_deleted", transaction_id=txn.id)
        return txn.id
