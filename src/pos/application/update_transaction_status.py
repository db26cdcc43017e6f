"""Application service: Update Transaction Status use case.

Refunds and cancellations are only accepted on the day the sale was
rung up; older transactions are closed to edits.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from pos.application.lookup import load_transaction
from pos.domain.repository.transaction_repository import TransactionRepository
from pos.domain.service.transaction_validator import validate_status_change

logger = structlog.get_logger()


class UpdateTransactionStatusHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(
        self,
        transaction_id: str,
        new_status: str,
        now: datetime | None = None,
    ) -> str:
        """Apply *new_status* and return the full id of the changed transaction."""
        txn = load_transaction(self._transaction_repo, transaction_id)

        now = now or datetime.now(timezone.utc)
        status = validate_status_change(txn, new_status, now)
        previous = txn.status
        txn.change_status(status, now)
        self._transaction_repo.save(txn)

        logger.info(
            "transaction_status_changed",
            transaction_id=txn.id,
            previous=previous.value,
            status=status.value,
        )
        return txn.id
