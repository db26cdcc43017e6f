"""CLI commands for recorded transactions."""

from __future__ import annotations

import click

from pos.application.delete_transaction import DeleteTransactionHandler
from pos.application.list_transactions import ListTransactionsHandler, TransactionQuery
from pos.application.print_receipt import PrintReceiptHandler
from pos.application.update_transaction_status import UpdateTransactionStatusHandler
from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import (
    current_restaurant_id,
    settings_repository,
    transaction_repository,
)


@click.command("list")
@click.option("--search", default="", help="Match id, customer or employee name.")
@click.option("--status", type=click.Choice(["completed", "refunded", "cancelled"]), default=None)
@click.option("--payment", type=click.Choice(["cash", "card", "other"]), default=None)
@click.option("--sort", "sort_by", type=click.Choice(["created_at", "total"]), default="created_at")
@click.option("--asc", is_flag=True, default=False, help="Sort ascending.")
def transaction_list(
    search: str,
    status: str | None,
    payment: str | None,
    sort_by: str,
    asc: bool,
) -> None:
    """List transactions."""
    handler = ListTransactionsHandler(transaction_repo=transaction_repository())
    query = TransactionQuery(
        search=search,
        status=status,
        payment_method=payment,
        sort_by=sort_by,
        descending=not asc,
    )

    try:
        rows = handler.handle(current_restaurant_id(), query)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':<32} {'Date':<16} {'Employee':<16} {'Status':<10} {'Payment':<8} {'Total':>10}")
    click.echo("-" * 97)
    for row in rows:
        click.echo(
            f"{row.id:<32} {row.created_at:<16} {row.employee_name[:16]:<16} "
            f"{row.status:<10} {row.payment_method:<8} {row.total:>10}"
        )


@click.command("show")
@click.option("--id", "transaction_id", required=True, help="Transaction ID or a unique prefix of it.")
@click.option("--structured", is_flag=True, default=False, help="Print labelled fields instead of thermal text.")
def transaction_show(transaction_id: str, structured: bool) -> None:
    """Reprint a transaction's receipt."""
    handler = PrintReceiptHandler(
        transaction_repo=transaction_repository(),
        settings=settings_repository().load(),
    )

    try:
        if not structured:
            click.echo(handler.thermal(transaction_id))
            return
        receipt = handler.structured(transaction_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(receipt.restaurant_name)
    for value in (receipt.address, receipt.phone):
        if value:
            click.echo(value)
    click.echo(f"Bill No: {receipt.bill_id}")
    click.echo(f"Date:    {receipt.date}")
    if receipt.table_number:
        click.echo(f"Table:   {receipt.table_number}")
    if receipt.server_name:
        click.echo(f"Server:  {receipt.server_name}")
    click.echo()
    for row in receipt.items:
        click.echo(f"  {row.name:<24} {row.quantity:>3} {row.unit_price:>10} {row.line_total:>10}")
    click.echo()
    click.echo(f"Subtotal: {receipt.subtotal}")
    if receipt.tax is not None:
        click.echo(f"{receipt.tax_label}: {receipt.tax}")
    click.echo(f"TOTAL:    {receipt.grand_total}")
    if receipt.payment_qr_url:
        click.echo(f"{receipt.payment_qr_caption}: {receipt.payment_qr_url}")
    click.echo(receipt.footer_text)


@click.command("set-status")
@click.option("--id", "transaction_id", required=True, help="Transaction ID or a unique prefix of it.")
@click.option(
    "--status",
    required=True,
    type=click.Choice(["completed", "refunded", "cancelled"]),
    help="New status.",
)
def transaction_set_status(transaction_id: str, status: str) -> None:
    """Refund or cancel a transaction made today."""
    handler = UpdateTransactionStatusHandler(transaction_repo=transaction_repository())

    try:
        resolved = handler.handle(transaction_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Transaction {resolved} marked {status}.")


@click.command("delete")
@click.option("--id", "transaction_id", required=True, help="Transaction ID or a unique prefix of it.")
@click.confirmation_option(prompt="Deleting a transaction cannot be undone. Continue?")
def transaction_delete(transaction_id: str) -> None:
    """Permanently delete a transaction (administrators only)."""
    handler = DeleteTransactionHandler(transaction_repo=transaction_repository())

    try:
        resolved = handler.handle(transaction_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Transaction {resolved} deleted.")
