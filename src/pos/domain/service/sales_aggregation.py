"""Domain service: Sales Aggregation.

Turns a snapshot of a restaurant's transactions into the rollups behind
the sales report and dashboard.  ``aggregate`` is a pure function of its
arguments: it never mutates the transactions it is given, and the same
snapshot with the same ``today`` always yields an equal report.

Revenue rules shared by the time series:

* ``completed`` adds the transaction total,
* ``refunded`` subtracts it,
* ``cancelled`` adds nothing but is counted.

Records that cannot be placed in time are skipped everywhere and reported
as ``DataIntegrityWarning`` anomalies instead of failing the report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable

import structlog

from pos.domain.exceptions import DataIntegrityWarning
from pos.domain.model.menu_item import Category
from pos.domain.model.transaction import (
    PaymentMethod,
    Transaction,
    TransactionStatus,
    parse_timestamp,
    to_local_date,
)
from pos.domain.model.value_objects import ZERO
from pos.domain.service.transaction_validator import normalize_optional_text

logger = structlog.get_logger()

SUPPORTED_RANGES = (7, 30)
TOP_N = 5
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
UNCATEGORIZED = "Other"
UNKNOWN_CATEGORY = "Unknown Category"


# ---------------------------------------------------------------------------
# Report shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DailySales:
    label: str
    day: date
    sales: Decimal


@dataclass(frozen=True)
class StatusCounts:
    label: str
    day: date
    completed: int = 0
    refunded: int = 0
    cancelled: int = 0


@dataclass(frozen=True)
class MonthlySales:
    label: str
    year: int
    month: int
    sales: Decimal


@dataclass(frozen=True)
class ItemSales:
    name: str
    count: int
    revenue: Decimal


@dataclass(frozen=True)
class CategorySales:
    name: str
    revenue: Decimal
    count: int


@dataclass(frozen=True)
class EmployeeSales:
    name: str
    revenue: Decimal
    count: int


@dataclass(frozen=True)
class TableSales:
    table: str
    revenue: Decimal
    count: int


@dataclass(frozen=True)
class SalesReport:
    """Every rollup for one snapshot.  Derived on demand, never stored."""

    range_days: int
    daily_sales: list[DailySales]
    status_breakdown: list[StatusCounts]
    monthly_sales: list[MonthlySales]
    top_selling_items: list[ItemSales]
    sales_by_category: list[CategorySales]
    sales_by_payment_method: dict[PaymentMethod, Decimal]
    sales_by_employee: list[EmployeeSales]
    sales_by_table: list[TableSales]
    cancelled_count: int
    anomalies: list[DataIntegrityWarning] = field(default_factory=list, compare=False)

    @property
    def window_total(self) -> Decimal:
        return sum((bucket.sales for bucket in self.daily_sales), ZERO)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


@dataclass
class _Tally:
    revenue: Decimal = ZERO
    count: int = 0


def aggregate(
    transactions: Iterable[Transaction],
    categories: Iterable[Category] = (),
    range_days: int = 7,
    today: date | None = None,
) -> SalesReport:
    """Build a SalesReport from a transaction snapshot.

    *range_days* selects the trailing window (7 or 30 days, ending
    *today* inclusive) used by the daily series and the payment, employee
    and table breakdowns.  The monthly series always covers the last 12
    months; item and category rollups cover the whole snapshot.
    """
    if range_days not in SUPPORTED_RANGES:
        raise ValueError(f"range_days must be one of {SUPPORTED_RANGES}, got {range_days}")
    today = today or date.today()

    window_days = _window_days(today, range_days)
    day_index = {day: i for i, day in enumerate(window_days)}
    daily = [ZERO] * len(window_days)
    statuses = [{status: 0 for status in TransactionStatus} for _ in window_days]

    months = _trailing_months(today, 12)
    month_index = {key: i for i, key in enumerate(months)}
    monthly = [ZERO] * len(months)

    category_names = {category.id: category.name for category in categories}
    items: dict[str, _Tally] = {}
    by_category: dict[str, _Tally] = {}
    by_payment = {method: ZERO for method in PaymentMethod}
    by_employee: dict[str, _Tally] = {}
    by_table: dict[str, _Tally] = {}
    cancelled_count = 0
    anomalies: list[DataIntegrityWarning] = []
    reported_categories: set[str] = set()

    for txn in transactions:
        created_at = parse_timestamp(txn.created_at)
        if created_at is None:
            anomalies.append(_skip(txn, "missing or unreadable created_at"))
            continue

        day = to_local_date(created_at)
        signed = _signed_total(txn)
        slot = day_index.get(day)
        if slot is not None:
            daily[slot] += signed
            statuses[slot][txn.status] += 1
            if txn.status is TransactionStatus.CANCELLED:
                cancelled_count += 1

        month_slot = month_index.get((day.year, day.month))
        if month_slot is not None:
            monthly[month_slot] += signed

        if txn.status is not TransactionStatus.COMPLETED:
            continue

        for item in txn.items:
            revenue = item.line_total.amount
            units = item.quantity.value
            _add(items, item.name, revenue, units)

            if item.category_id is None:
                category = UNCATEGORIZED
            elif item.category_id in category_names:
                category = category_names[item.category_id]
            else:
                category = UNKNOWN_CATEGORY
                if item.category_id not in reported_categories:
                    reported_categories.add(item.category_id)
                    anomalies.append(_unknown_category(txn, item.category_id))
            _add(by_category, category, revenue, units)

        if slot is None:
            continue
        by_payment[txn.payment_method] += txn.total.amount
        _add(by_employee, txn.employee_name, txn.total.amount)
        table = normalize_optional_text(txn.table_number)
        if table is not None:
            _add(by_table, table, txn.total.amount)

    return SalesReport(
        range_days=range_days,
        daily_sales=[
            DailySales(label=WEEKDAY_LABELS[day.weekday()], day=day, sales=daily[i])
            for i, day in enumerate(window_days)
        ],
        status_breakdown=[
            StatusCounts(
                label=WEEKDAY_LABELS[day.weekday()],
                day=day,
                completed=statuses[i][TransactionStatus.COMPLETED],
                refunded=statuses[i][TransactionStatus.REFUNDED],
                cancelled=statuses[i][TransactionStatus.CANCELLED],
            )
            for i, day in enumerate(window_days)
        ],
        monthly_sales=[
            MonthlySales(label=MONTH_LABELS[month - 1], year=year, month=month, sales=monthly[i])
            for i, (year, month) in enumerate(months)
        ],
        top_selling_items=[
            ItemSales(name=name, count=tally.count, revenue=tally.revenue)
            for name, tally in _ranked(items)[:TOP_N]
        ],
        sales_by_category=[
            CategorySales(name=name, revenue=tally.revenue, count=tally.count)
            for name, tally in _ranked(by_category)
        ],
        sales_by_payment_method=by_payment,
        sales_by_employee=[
            EmployeeSales(name=name, revenue=tally.revenue, count=tally.count)
            for name, tally in _ranked(by_employee)[:TOP_N]
        ],
        sales_by_table=[
            TableSales(table=name, revenue=tally.revenue, count=tally.count)
            for name, tally in _ranked(by_table)[:TOP_N]
        ],
        cancelled_count=cancelled_count,
        anomalies=anomalies,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _window_days(today: date, range_days: int) -> list[date]:
    """Dates in the trailing window.

    The weekly view is laid out Monday to Sunday; the monthly view is
    chronological.
    """
    start = today - timedelta(days=range_days - 1)
    days = [start + timedelta(days=offset) for offset in range(range_days)]
    if range_days == 7:
        days.sort(key=date.weekday)
    return days


def _trailing_months(today: date, count: int) -> list[tuple[int, int]]:
    """(year, month) keys for the last *count* months, oldest first."""
    keys: list[tuple[int, int]] = []
    year, month = today.year, today.month
    for _ in range(count):
        keys.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    keys.reverse()
    return keys


def _signed_total(txn: Transaction) -> Decimal:
    if txn.status is TransactionStatus.COMPLETED:
        return txn.total.amount
    if txn.status is TransactionStatus.REFUNDED:
        return -txn.total.amount
    return ZERO


def _add(groups: dict[str, _Tally], key: str, revenue: Decimal, count: int = 1) -> None:
    tally = groups.setdefault(key, _Tally())
    tally.revenue += revenue
    tally.count += count


def _ranked(groups: dict[str, _Tally]) -> list[tuple[str, _Tally]]:
    # sorted() is stable, so equal revenues keep first-seen order
    return sorted(groups.items(), key=lambda entry: entry[1].revenue, reverse=True)


def _skip(txn: Transaction, reason: str) -> DataIntegrityWarning:
    logger.warning("transaction_skipped", transaction_id=txn.id, reason=reason)
    return DataIntegrityWarning(txn.id, reason)


def _unknown_category(txn: Transaction, category_id: str) -> DataIntegrityWarning:
    reason = f"unknown category '{category_id}'"
    logger.warning("category_unresolved", transaction_id=txn.id, category_id=category_id)
    return DataIntegrityWarning(txn.id, reason)
