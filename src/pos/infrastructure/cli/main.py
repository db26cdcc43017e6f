import click

from pos.infrastructure.cli.checkout_commands import checkout
from pos.infrastructure.cli.customer_commands import customer_list
from pos.infrastructure.cli.menu_commands import menu_add, menu_list, menu_update
from pos.infrastructure.cli.report_commands import dashboard, report
from pos.infrastructure.cli.settings_commands import settings_set, settings_show
from pos.infrastructure.cli.transaction_commands import (
    transaction_delete,
    transaction_list,
    transaction_set_status,
    transaction_show,
)
from pos.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Log level (default: $POS_LOG_LEVEL or WARNING).")
def cli(log_level: str | None) -> None:
    """ezPay POS: checkout, receipts and sales reports"""
    configure_logging(log_level)


@cli.group()
def transaction() -> None:
    """Inspect and administer recorded transactions."""


@cli.group()
def menu() -> None:
    """Manage the menu."""


@cli.group()
def customer() -> None:
    """Customers remembered by phone number."""


@cli.group()
def settings() -> None:
    """Show or change bill settings."""


# Register subcommands
cli.add_command(checkout)
cli.add_command(report)
cli.add_command(dashboard)
transaction.add_command(transaction_list)
transaction.add_command(transaction_show)
transaction.add_command(transaction_set_status)
transaction.add_command(transaction_delete)
menu.add_command(menu_list)
menu.add_command(menu_add)
menu.add_command(menu_update)
settings.add_command(settings_show)
settings.add_command(settings_set)
customer.add_command(customer_list)
