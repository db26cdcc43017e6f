"""Application service: Dashboard Summary use case (query)."""

from __future__ import annotations

from datetime import date

from pos.application.dto import DashboardSummaryDTO
from pos.application.list_transactions import ListTransactionsHandler
from pos.domain.formatting import format_amount
from pos.domain.model.transaction import TransactionStatus
from pos.domain.model.value_objects import ZERO
from pos.domain.repository.menu_repository import CategoryRepository
from pos.domain.repository.transaction_repository import TransactionRepository
from pos.domain.service.sales_aggregation import aggregate

RECENT_COUNT = 5


class DashboardSummaryHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._category_repo = category_repo

    def handle(self, restaurant_id: str, today: date | None = None) -> DashboardSummaryDTO:
        """Headline figures over every completed sale of the restaurant."""
        snapshot = self._transaction_repo.list_for_restaurant(restaurant_id)
        completed = [txn for txn in snapshot if txn.status is TransactionStatus.COMPLETED]

        total_sales = sum((txn.total.amount for txn in completed), ZERO)
        total_orders = len(completed)
        average = total_sales / total_orders if total_orders else ZERO

        top_items = aggregate(
            snapshot, self._category_repo.list_all(), today=today
        ).top_selling_items
        recent = ListTransactionsHandler(self._transaction_repo).handle(restaurant_id)

        return DashboardSummaryDTO(
            total_sales=format_amount(total_sales),
            total_orders=total_orders,
            average_order_value=format_amount(average),
            most_popular_item=top_items[0].name if top_items else "N/A",
            recent_transactions=recent[:RECENT_COUNT],
        )
