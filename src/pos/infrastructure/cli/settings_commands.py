"""CLI commands for bill settings."""

from __future__ import annotations

import click

from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import settings_repository


@click.command("show")
def settings_show() -> None:
    """Print the current bill settings."""
    current = settings_repository().load().to_mapping()
    width = max(len(key) for key in current)
    for key, value in current.items():
        click.echo(f"{key:<{width}}  {'' if value is None else value}")


@click.command("set")
@click.argument("key")
@click.argument("value")
def settings_set(key: str, value: str) -> None:
    """Change one bill setting, e.g. `pos settings set tax_rate 18`."""
    repo = settings_repository()

    try:
        updated = repo.load().with_value(key, value)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    repo.save(updated)
    click.echo(f"Setting {key} updated.")
