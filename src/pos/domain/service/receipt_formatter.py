"""Domain service: Receipt Formatter.

Renders a finalized bill two ways:

* ``render_thermal_receipt``: 48-column plaintext for 80mm thermal
  printers, copied verbatim to the printer so the layout is a contract.
* ``render_structured_receipt``: labelled fields for a screen preview or
  print-to-PDF layout.

Both are pure: everything they show comes from the settings and the bill
passed in.  ``render_sales_report`` gives the same treatment to a
``SalesReport`` for the plaintext report export.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from pos.domain.formatting import (
    center_text,
    format_amount,
    format_money,
    format_rate,
    justify_text,
)
from pos.domain.model.line_item import LineItem
from pos.domain.model.settings import BillSettings
from pos.domain.model.transaction import PaymentMethod, Transaction
from pos.domain.model.value_objects import Money
from pos.domain.service.sales_aggregation import SalesReport

LINE_WIDTH = 48
DASH_LINE = "-" * LINE_WIDTH
NAME_WIDTH = 20
QTY_WIDTH = 3
AMOUNT_WIDTH = 6
BILL_ID_LENGTH = 8
PAPER_FEED_LINES = 4
DATE_FORMAT = "%d/%m/%Y"
DATETIME_FORMAT = "%d/%m/%Y %H:%M"
QR_CAPTION = "Scan to Pay"


@dataclass(frozen=True)
class FinalizedBill:
    """Everything printed on a bill, fixed at checkout."""

    id: str
    items: list[LineItem]
    subtotal: Money
    tax: Money
    total: Money
    payment_method: PaymentMethod
    employee_name: str
    created_at: datetime | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    table_number: str | None = None

    @staticmethod
    def from_transaction(txn: Transaction) -> FinalizedBill:
        return FinalizedBill(
            id=txn.id or "",
            items=list(txn.items),
            subtotal=txn.subtotal,
            tax=txn.tax,
            total=txn.total,
            payment_method=txn.payment_method,
            employee_name=txn.employee_name,
            created_at=txn.created_at,
            customer_name=txn.customer_name,
            customer_phone=txn.customer_phone,
            table_number=txn.table_number,
        )


# ---------------------------------------------------------------------------
# Thermal text
# ---------------------------------------------------------------------------


def render_thermal_receipt(settings: BillSettings, bill: FinalizedBill) -> str:
    lines: list[str] = []
    symbol = settings.currency_symbol

    lines.append(center_text(settings.restaurant_name, LINE_WIDTH))
    if settings.address:
        lines.append(center_text(settings.address, LINE_WIDTH))
    if settings.phone:
        lines.append(center_text(f"Phone: {settings.phone}", LINE_WIDTH))
    lines.append(DASH_LINE)

    lines.append(center_text("Bill Receipt", LINE_WIDTH))
    lines.append(
        justify_text(
            f"Bill ID: {bill.id[:BILL_ID_LENGTH]}",
            f"Date: {_format_date(bill.created_at, DATE_FORMAT)}",
            LINE_WIDTH,
        )
    )
    lines.append(f"Served by: {bill.employee_name[:LINE_WIDTH - 11]}")
    if bill.customer_name:
        lines.append(f"Customer: {bill.customer_name[:LINE_WIDTH - 10]}")
    if bill.customer_phone:
        lines.append(f"Phone: {bill.customer_phone}")
    if bill.table_number:
        lines.append(f"Table: {bill.table_number}")
    lines.append(f"Payment: {bill.payment_method.value.capitalize()}")
    lines.append(DASH_LINE)

    lines.append(justify_text("Item", "Qty  Price  Total", LINE_WIDTH))
    lines.append(DASH_LINE)
    for item in bill.items:
        lines.append(format_item_line(item))
    lines.append(DASH_LINE)

    lines.append(justify_text("Subtotal:", format_money(bill.subtotal.amount, symbol), LINE_WIDTH))
    lines.append(
        justify_text(
            f"Tax ({format_rate(_effective_rate(bill, settings))}%):",
            format_money(bill.tax.amount, symbol),
            LINE_WIDTH,
        )
    )
    lines.append(justify_text("Total:", format_money(bill.total.amount, symbol), LINE_WIDTH))
    lines.append(DASH_LINE)

    lines.append(center_text(settings.footer_text, LINE_WIDTH))
    lines.extend([""] * PAPER_FEED_LINES)
    return "\n".join(lines)


def format_item_line(item: LineItem) -> str:
    """One receipt row: name, quantity, unit price, line total."""
    name = item.name[:NAME_WIDTH].ljust(NAME_WIDTH)
    qty = str(item.quantity.value).rjust(QTY_WIDTH)
    price = format_amount(item.unit_price.amount).rjust(AMOUNT_WIDTH)
    total = format_amount(item.line_total.amount).rjust(AMOUNT_WIDTH)
    return f"{name} {qty}  {price}  {total}"


# ---------------------------------------------------------------------------
# Structured receipt
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReceiptRow:
    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class StructuredReceipt:
    restaurant_name: str
    address: str
    phone: str
    date: str
    bill_id: str
    items: list[ReceiptRow]
    subtotal: str
    grand_total: str
    footer_text: str
    font_size: int
    logo_url: str | None = None
    table_number: str | None = None
    server_name: str | None = None
    tax_label: str | None = None
    tax: str | None = None
    payment_qr_url: str | None = None
    payment_qr_caption: str | None = None


def render_structured_receipt(settings: BillSettings, bill: FinalizedBill) -> StructuredReceipt:
    symbol = settings.currency_symbol
    show_logo = settings.include_logo_on_bill and settings.logo_url
    show_qr = settings.show_upi_qr_code and settings.qr_code_url

    return StructuredReceipt(
        restaurant_name=settings.restaurant_name,
        address=settings.address,
        phone=settings.phone,
        date=_format_date(bill.created_at, DATETIME_FORMAT),
        logo_url=settings.logo_url if show_logo else None,
        bill_id=bill.id,
        table_number=bill.table_number,
        server_name=bill.employee_name if settings.show_server_name else None,
        items=[
            ReceiptRow(
                name=item.name,
                quantity=item.quantity.value,
                unit_price=format_money(item.unit_price.amount, symbol),
                line_total=format_money(item.line_total.amount, symbol),
            )
            for item in bill.items
        ],
        subtotal=format_money(bill.subtotal.amount, symbol),
        tax_label=(
            f"Tax ({format_rate(_effective_rate(bill, settings))}%)"
            if settings.show_itemized_tax
            else None
        ),
        tax=format_money(bill.tax.amount, symbol) if settings.show_itemized_tax else None,
        grand_total=format_money(bill.total.amount, symbol),
        payment_qr_url=settings.qr_code_url if show_qr else None,
        payment_qr_caption=QR_CAPTION if show_qr else None,
        footer_text=settings.footer_text,
        font_size=settings.bill_font_size,
    )


# ---------------------------------------------------------------------------
# Sales report export
# ---------------------------------------------------------------------------


def render_sales_report(settings: BillSettings, report: SalesReport) -> str:
    symbol = settings.currency_symbol
    lines = [f"Sales Report: {settings.restaurant_name}", ""]

    lines.append(f"Daily Sales (Last {report.range_days} Days)")
    for bucket in report.daily_sales:
        lines.append(f"  {bucket.label} {bucket.day:%d/%m}: {format_money(bucket.sales, symbol)}")
    lines.append(f"  Window total: {format_money(report.window_total, symbol)}")
    lines.append("")

    lines.append("Monthly Sales (Last 12 Months)")
    for bucket in report.monthly_sales:
        lines.append(f"  {bucket.label} {bucket.year}: {format_money(bucket.sales, symbol)}")
    lines.append("")

    lines.append("Top Selling Items")
    for item in report.top_selling_items:
        lines.append(f"  {item.name}: {item.count} units, {format_money(item.revenue, symbol)}")
    lines.append("")

    lines.append("Sales by Category")
    for category in report.sales_by_category:
        lines.append(
            f"  {category.name}: {category.count} units, {format_money(category.revenue, symbol)}"
        )
    lines.append("")

    lines.append("Sales by Payment Method")
    for method, revenue in report.sales_by_payment_method.items():
        lines.append(f"  {method.value.capitalize()}: {format_money(revenue, symbol)}")
    lines.append("")

    lines.append("Top Employees")
    for employee in report.sales_by_employee:
        lines.append(
            f"  {employee.name}: {employee.count} sales, {format_money(employee.revenue, symbol)}"
        )
    lines.append("")

    lines.append("Top Tables")
    for table in report.sales_by_table:
        lines.append(f"  {table.table}: {table.count} bills, {format_money(table.revenue, symbol)}")
    lines.append("")

    lines.append("Transaction Status Breakdown")
    for counts in report.status_breakdown:
        lines.append(
            f"  {counts.label} {counts.day:%d/%m}: Completed={counts.completed}, "
            f"Refunded={counts.refunded}, Cancelled={counts.cancelled}"
        )

    if report.anomalies:
        lines.append("")
        lines.append(f"Skipped records: {len(report.anomalies)}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _format_date(moment: datetime | None, fmt: str) -> str:
    if moment is None:
        return "-"
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.strftime(fmt)


def _effective_rate(bill: FinalizedBill, settings: BillSettings) -> Decimal:
    """Rate actually charged on *bill*; falls back to the configured rate."""
    if bill.subtotal.amount > 0:
        return (bill.tax.amount * 100 / bill.subtotal.amount).quantize(Decimal("0.01"))
    return settings.tax_rate
