"""CLI command for ringing up a sale."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

from pos.application.add_to_cart import AddToCartHandler
from pos.application.checkout import CheckoutHandler
from pos.domain.exceptions import DomainException
from pos.domain.model.cart import Cart
from pos.infrastructure.bootstrap import (
    current_operator,
    customer_repository,
    menu_repository,
    settings_repository,
    transaction_repository,
)


def _parse_items(raw: str) -> list[tuple[str, int]]:
    """Parse 'Coffee:2,Garlic Bread:1' into (name, quantity) pairs."""
    pairs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ItemName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for item '{name}'."
            )
        pairs.append((name.strip(), qty))
    return pairs


def _parse_cash(raw: str | None) -> Decimal | None:
    if raw is None:
        return None
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid cash amount '{raw}'.")


@click.command("checkout")
@click.option("--items", required=True, help="Items as 'Name:Qty,Name:Qty'.")
@click.option(
    "--payment",
    type=click.Choice(["cash", "card", "other"]),
    default="cash",
    show_default=True,
    help="Payment method.",
)
@click.option("--cash", "cash_received", default=None, help="Cash handed over (cash payments).")
@click.option("--customer", default=None, help="Customer name.")
@click.option("--phone", default=None, help="Customer phone number.")
@click.option("--table", default=None, help="Table number.")
def checkout(
    items: str,
    payment: str,
    cash_received: str | None,
    customer: str | None,
    phone: str | None,
    table: str | None,
) -> None:
    """Record a sale and print its thermal receipt."""
    pairs = _parse_items(items)
    cash = _parse_cash(cash_received)
    cart = Cart(settings=settings_repository().load())
    add_to_cart = AddToCartHandler(menu_repo=menu_repository())
    handler = CheckoutHandler(
        transaction_repo=transaction_repository(),
        customer_repo=customer_repository(),
    )

    try:
        for name, qty in pairs:
            add_to_cart.handle(cart, name, qty)
        cart.set_customer_info(customer, phone, table)
        result = handler.handle(cart, payment, current_operator(), cash_received=cash)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(result.receipt_text)
    click.echo(f"Transaction {result.transaction.id} recorded.")
    if payment == "cash" and cash is not None:
        click.echo(f"Change due: {result.change}")
