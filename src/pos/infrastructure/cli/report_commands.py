"""CLI commands for sales reporting."""

from __future__ import annotations

import click

from pos.application.dashboard_summary import DashboardSummaryHandler
from pos.application.generate_sales_report import GenerateSalesReportHandler
from pos.domain.exceptions import DomainException
from pos.domain.service.receipt_formatter import render_sales_report
from pos.infrastructure.bootstrap import (
    category_repository,
    current_restaurant_id,
    settings_repository,
    transaction_repository,
)


@click.command("report")
@click.option(
    "--range",
    "range_days",
    type=click.Choice(["7", "30"]),
    default="7",
    show_default=True,
    help="Trailing window in days.",
)
@click.option("--follow", is_flag=True, default=False, help="Re-print whenever transactions change.")
@click.option("--interval", default=2.0, show_default=True, help="Polling interval for --follow (seconds).")
def report(range_days: str, follow: bool, interval: float) -> None:
    """Print the sales report."""
    repo = transaction_repository()
    settings = settings_repository().load()
    handler = GenerateSalesReportHandler(
        transaction_repo=repo,
        category_repo=category_repository(),
    )

    if not follow:
        try:
            sales = handler.handle(current_restaurant_id(), range_days=int(range_days))
        except DomainException as exc:
            raise click.ClickException(str(exc))
        click.echo(render_sales_report(settings, sales))
        return

    feed = repo.change_feed(current_restaurant_id(), poll_interval=interval)
    for sales in handler.follow(feed, range_days=int(range_days)):
        click.echo(render_sales_report(settings, sales))
        click.echo("=" * 48)


@click.command("dashboard")
def dashboard() -> None:
    """Show headline sales figures."""
    handler = DashboardSummaryHandler(
        transaction_repo=transaction_repository(),
        category_repo=category_repository(),
    )
    summary = handler.handle(current_restaurant_id())
    symbol = settings_repository().load().currency_symbol

    click.echo(f"Total Sales:      {symbol}{summary.total_sales}")
    click.echo(f"Total Orders:     {summary.total_orders}")
    click.echo(f"Avg. Order Value: {symbol}{summary.average_order_value}")
    click.echo(f"Most Popular:     {summary.most_popular_item}")
    if summary.recent_transactions:
        click.echo()
        click.echo("Recent transactions:")
        for txn in summary.recent_transactions:
            click.echo(f"  {txn.id:<32} {txn.created_at:<16} {txn.status:<10} {txn.total:>10}")
