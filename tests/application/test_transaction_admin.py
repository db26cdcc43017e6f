"""Integration tests for status changes, deletion, listing and reprints."""

from datetime import datetime

import pytest

from pos.application.delete_transaction import DeleteTransactionHandler
from pos.application.list_transactions import ListTransactionsHandler, TransactionQuery
from pos.application.print_receipt import PrintReceiptHandler
from pos.application.update_transaction_status import UpdateTransactionStatusHandler
from pos.domain.exceptions import BusinessRuleViolation, EntityNotFoundError, ValidationError
from pos.domain.model.settings import BillSettings
from pos.domain.model.transaction import PaymentMethod, TransactionStatus
from tests.builders import make_item, make_transaction
from tests.fakes import FakeTransactionRepository


def _repo() -> FakeTransactionRepository:
    return FakeTransactionRepository([
        make_transaction(
            datetime(2026, 3, 11, 9, 0),
            items=[make_item(price="120.00")],
            txn_id="aaa111",
            customer_name="Ravi",
        ),
        make_transaction(
            datetime(2026, 3, 10, 20, 0),
            items=[make_item(price="450.00")],
            txn_id="bbb222",
            employee_name="Meera",
            payment_method=PaymentMethod.CARD,
        ),
        make_transaction(
            datetime(2026, 3, 9, 13, 0),
            items=[make_item(price="80.00")],
            txn_id="ccc333",
            status=TransactionStatus.REFUNDED,
        ),
        make_transaction(None, items=[make_item(price="10.00")], txn_id="ddd444"),
        make_transaction(datetime(2026, 3, 11, 9, 0), txn_id="other", restaurant_id="r2"),
    ])


class TestUpdateStatus:

    def test_refund_same_day(self):
        repo = _repo()
        now = datetime(2026, 3, 11, 18, 0)
        UpdateTransactionStatusHandler(repo).handle("aaa111", "refunded", now=now)
        saved = repo.get_by_id("aaa111")
        assert saved.status is TransactionStatus.REFUNDED
        assert saved.updated_at == now

    def test_previous_day_rejected(self):
        repo = _repo()
        with pytest.raises(BusinessRuleViolation):
            UpdateTransactionStatusHandler(repo).handle(
                "bbb222", "cancelled", now=datetime(2026, 3, 11, 8, 0)
            )
        assert repo.get_by_id("bbb222").status is TransactionStatus.COMPLETED

    def test_unknown_transaction(self):
        with pytest.raises(EntityNotFoundError):
            UpdateTransactionStatusHandler(_repo()).handle("nope", "refunded")


class TestDelete:

    def test_delete(self):
        repo = _repo()
        DeleteTransactionHandler(repo).handle("ccc333")
        assert repo.get_by_id("ccc333") is None

    def test_delete_unknown(self):
        with pytest.raises(EntityNotFoundError):
            DeleteTransactionHandler(_repo()).handle("nope")


class TestListTransactions:

    def test_newest_first_by_default(self):
        rows = ListTransactionsHandler(_repo()).handle("r1")
        assert [row.id for row in rows] == ["aaa111", "bbb222", "ccc333", "ddd444"]
        assert rows[-1].created_at == "-"

    def test_search_matches_customer_and_employee(self):
        handler = ListTransactionsHandler(_repo())
        assert [r.id for r in handler.handle("r1", TransactionQuery(search="ravi"))] == ["aaa111"]
        assert [r.id for r in handler.handle("r1", TransactionQuery(search="MEERA"))] == ["bbb222"]
        assert [r.id for r in handler.handle("r1", TransactionQuery(search="ccc"))] == ["ccc333"]

    def test_filters(self):
        handler = ListTransactionsHandler(_repo())
        refunded = handler.handle("r1", TransactionQuery(status="refunded"))
        assert [r.id for r in refunded] == ["ccc333"]
        card = handler.handle("r1", TransactionQuery(payment_method="card"))
        assert [r.id for r in card] == ["bbb222"]

    def test_sort_by_total_ascending(self):
        rows = ListTransactionsHandler(_repo()).handle(
            "r1", TransactionQuery(sort_by="total", descending=False)
        )
        assert [row.total for row in rows] == ["10.00", "80.00", "120.00", "450.00"]

    def test_invalid_sort_field(self):
        with pytest.raises(ValidationError, match="Cannot sort by"):
            ListTransactionsHandler(_repo()).handle("r1", TransactionQuery(sort_by="table"))


class TestPrintReceipt:

    def test_thermal_reprint(self):
        handler = PrintReceiptHandler(_repo(), BillSettings(restaurant_name="Spice Route"))
        text = handler.thermal("aaa111")
        assert "Bill ID: aaa111" in text
        assert "Customer: Ravi" in text

    def test_structured_reprint(self):
        handler = PrintReceiptHandler(_repo(), BillSettings())
        receipt = handler.structured("bbb222")
        assert receipt.grand_total == "₹450.00"
        assert receipt.server_name == "Meera"

    def test_unknown_transaction(self):
        handler = PrintReceiptHandler(_repo(), BillSettings())
        with pytest.raises(EntityNotFoundError):
            handler.thermal("nope")


class TestIdPrefixLookup:

    def test_unique_prefix_resolves(self):
        repo = _repo()
        now = datetime(2026, 3, 11, 18, 0)
        resolved = UpdateTransactionStatusHandler(repo).handle("aaa", "refunded", now=now)
        assert resolved == "aaa111"
        assert repo.get_by_id("aaa111").status is TransactionStatus.REFUNDED

    def test_reprint_by_prefix(self):
        handler = PrintReceiptHandler(_repo(), BillSettings())
        assert handler.structured(" bbb2 ").bill_id == "bbb222"

    def test_delete_by_prefix_returns_full_id(self):
        repo = _repo()
        assert DeleteTransactionHandler(repo).handle("ccc") == "ccc333"
        assert repo.get_by_id("ccc333") is None

    def test_ambiguous_prefix_is_rejected(self):
        repo = _repo()
        repo.save(make_transaction(datetime(2026, 3, 11, 10, 0), txn_id="aaa999"))
        with pytest.raises(ValidationError, match="ambiguous: it matches 2"):
            DeleteTransactionHandler(repo).handle("aaa")
        assert repo.get_by_id("aaa111") is not None
        assert repo.get_by_id("aaa999") is not None

    def test_exact_id_wins_over_longer_matches(self):
        repo = _repo()
        repo.save(make_transaction(datetime(2026, 3, 11, 10, 0), txn_id="aaa1112"))
        assert DeleteTransactionHandler(repo).handle("aaa111") == "aaa111"
        assert repo.get_by_id("aaa1112") is not None

    def test_blank_id_is_not_found(self):
        with pytest.raises(EntityNotFoundError):
            DeleteTransactionHandler(_repo()).handle("  ")
