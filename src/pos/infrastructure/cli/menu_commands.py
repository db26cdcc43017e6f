"""CLI commands for the menu."""

from __future__ import annotations

import click

from pos.application.add_menu_item import AddMenuItemHandler
from pos.application.update_menu_item import UpdateMenuItemHandler
from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import category_repository, menu_repository


@click.command("add")
@click.option("--name", required=True, help="Item name.")
@click.option("--price", required=True, help="Price (e.g. 199.00).")
@click.option("--category", "category_id", default=None, help="Category ID.")
@click.option("--description", default="", help="Short description.")
def menu_add(name: str, price: str, category_id: str | None, description: str) -> None:
    """Add a new item to the menu."""
    handler = AddMenuItemHandler(
        menu_repo=menu_repository(),
        category_repo=category_repository(),
    )

    try:
        item = handler.handle(
            name=name, price=price, category_id=category_id, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Menu item #{item.id} '{item.name}' added at {item.price}")


@click.command("list")
def menu_list() -> None:
    """List every item on the menu."""
    items = menu_repository().list_all()
    categories = {c.id: c.name for c in category_repository().list_all()}

    if not items:
        click.echo("No menu items found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Category':<16} {'Price':>10}  Available")
    click.echo("-" * 70)
    for item in items:
        category = categories.get(item.category_id or "", "-")
        available = "yes" if item.available else "no"
        click.echo(f"{item.id:<6} {item.name:<24} {category:<16} {str(item.price):>10}  {available}")


@click.command("update")
@click.option("--id", "item_id", required=True, help="Menu item ID.")
@click.option("--price", default=None, help="New price (e.g. 249.00).")
@click.option("--available/--unavailable", default=None, help="Toggle availability.")
def menu_update(item_id: str, price: str | None, available: bool | None) -> None:
    """Change a menu item's price or availability."""
    if price is None and available is None:
        raise click.ClickException("Nothing to update: pass --price and/or --available/--unavailable")

    handler = UpdateMenuItemHandler(menu_repo=menu_repository())

    try:
        handler.handle(item_id=item_id, new_price=price, available=available)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Menu item #{item_id} updated.")
