"""Application service: Print Receipt use case (query).

Reprints a stored transaction in either receipt format.
"""

from __future__ import annotations

from pos.application.lookup import load_transaction
from pos.domain.model.settings import BillSettings
from pos.domain.repository.transaction_repository import TransactionRepository
from pos.domain.service.receipt_formatter import (
    FinalizedBill,
    StructuredReceipt,
    render_structured_receipt,
    render_thermal_receipt,
)


class PrintReceiptHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        settings: BillSettings,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._settings = settings

    def thermal(self, transaction_id: str) -> str:
        return render_thermal_receipt(self._settings, self._load_bill(transaction_id))

    def structured(self, transaction_id: str) -> StructuredReceipt:
        return render_structured_receipt(self._settings, self._load_bill(transaction_id))

    def _load_bill(self, transaction_id: str) -> FinalizedBill:
        txn = load_transaction(self._transaction_repo, transaction_id)
        return FinalizedBill.from_transaction(txn)
