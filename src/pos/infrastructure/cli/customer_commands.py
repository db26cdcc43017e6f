"""CLI commands for customers remembered at checkout."""

from __future__ import annotations

import click

from pos.application.list_customers import ListCustomersHandler
from pos.infrastructure.bootstrap import current_restaurant_id, customer_repository


@click.command("list")
def customer_list() -> None:
    """List customers with their visit counts."""
    handler = ListCustomersHandler(customer_repo=customer_repository())
    rows = handler.handle(current_restaurant_id())

    if not rows:
        click.echo("No customers found.")
        return

    click.echo(f"{'Name':<24} {'Phone':<16} {'Visits':>6}  {'Last visit':<16}")
    click.echo("-" * 66)
    for row in rows:
        click.echo(f"{row.name[:24]:<24} {row.phone:<16} {row.visits:>6}  {row.last_visit:<16}")
