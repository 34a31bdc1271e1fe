"""CLI commands for the item catalog."""

from __future__ import annotations

import click

from shuttering.application.add_item import AddItemHandler
from shuttering.application.show_inventory import ShowInventoryHandler
from shuttering.application.update_item_rate import UpdateItemRateHandler
from shuttering.domain.exceptions import DomainException
from shuttering.infrastructure.bootstrap import item_repository
from shuttering.infrastructure.config import AppConfig


@click.command("list")
@click.option("--search", default=None, help="Filter by name or description.")
@click.pass_obj
def item_list(config: AppConfig, search: str | None) -> None:
    """List catalog items and their stock."""
    handler = ShowInventoryHandler(item_repo=item_repository(config.data_dir))
    items = handler.handle(search=search)

    if not items:
        click.echo("No items found.")
        return

    click.echo(
        f"{'ID':<5} {'Name':<12} {'Rate/day':>10} {'Total':>7} {'On rent':>8} {'Available':>10}"
    )
    click.echo("-" * 57)
    for item in items:
        click.echo(
            f"{item.id:<5} {item.name:<12} {item.daily_rate:>10} "
            f"{item.total:>7} {item.on_rent:>8} {item.available:>10}"
        )


@click.command("add")
@click.option("--name", required=True, help="Item name.")
@click.option("--rate", required=True, help="Daily rate (e.g. 10 or 0.5).")
@click.option("--quantity", required=True, type=int, help="Units owned.")
@click.option("--description", default="", help="Short description.")
@click.pass_obj
def item_add(config: AppConfig, name: str, rate: str, quantity: int, description: str) -> None:
    """Add a new item type to the catalog."""
    handler = AddItemHandler(item_repo=item_repository(config.data_dir))

    try:
        item = handler.handle(
            name=name, daily_rate=rate, total_quantity=quantity, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item.id} '{item.name}' added at {item.daily_rate}/day")


@click.command("update-rate")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--rate", required=True, help="New daily rate.")
@click.pass_obj
def item_update_rate(config: AppConfig, item_id: str, rate: str) -> None:
    """Change an item's daily rate (open rentals keep their rate)."""
    handler = UpdateItemRateHandler(item_repo=item_repository(config.data_dir))

    try:
        handler.handle(item_id=item_id, new_rate=rate)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item_id} rate updated to {rate}/day")
