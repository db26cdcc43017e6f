"""Application service: Generate Sales Report use case (query).

Loads a snapshot of the restaurant's transactions plus the category
lookup and hands both to the aggregation engine.  ``follow`` does the
same for every snapshot a change feed produces.
"""

from __future__ import annotations

from datetime import date
from typing import Iterator

import structlog

from pos.domain.model.transaction import Transaction
from pos.domain.repository.change_feed import ChangeFeed
from pos.domain.repository.menu_repository import CategoryRepository
from pos.domain.repository.transaction_repository import TransactionRepository
from pos.domain.service.sales_aggregation import SalesReport, aggregate

logger = structlog.get_logger()


class GenerateSalesReportHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._category_repo = category_repo

    def handle(
        self,
        restaurant_id: str,
        range_days: int = 7,
        today: date | None = None,
    ) -> SalesReport:
        snapshot = self._transaction_repo.list_for_restaurant(restaurant_id)
        report = aggregate(
            snapshot,
            self._category_repo.list_all(),
            range_days=range_days,
            today=today,
        )
        logger.debug(
            "sales_report_generated",
            restaurant_id=restaurant_id,
            transactions=len(snapshot),
            skipped=len(report.anomalies),
        )
        return report

    def follow(
        self,
        feed: ChangeFeed[Transaction],
        range_days: int = 7,
        today: date | None = None,
    ) -> Iterator[SalesReport]:
        """Yield a fresh report for every snapshot *feed* produces."""
        for snapshot in feed:
            yield aggregate(
                snapshot,
                self._category_repo.list_all(),
                range_days=range_days,
                today=today,
            )
