import logging
from dataclasses import replace
from pathlib import Path

import click

from shuttering.application.dashboard import DashboardHandler
from shuttering.infrastructure.bootstrap import (
    customer_repository,
    item_repository,
    rental_repository,
)
from shuttering.infrastructure.cli.customer_commands import (
    customer_add,
    customer_delete,
    customer_list,
    customer_show,
)
from shuttering.infrastructure.cli.item_commands import item_add, item_list, item_update_rate
from shuttering.infrastructure.cli.rental_commands import (
    rental_issue,
    rental_list,
    rental_pay,
    rental_return,
    rental_show,
)
from shuttering.infrastructure.config import AppConfig, ConfigError, load_config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
    default=None, help="TOML config file (default: $SHUTTERING_CONFIG).",
)
@click.option(
    "--data-dir", type=click.Path(file_okay=False, path_type=Path),
    default=None, help="Directory holding items/customers/rentals JSON.",
)
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    data_dir: Path | None,
    log_level: str | None,
) -> None:
    """Shuttering — equipment rental and billing"""
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc))

    if data_dir is not None:
        config = replace(config, data_dir=data_dir)
    if log_level is not None:
        config = replace(config, log_level=log_level.upper())
    if not isinstance(logging.getLevelName(config.log_level), int):
        raise click.ClickException(f"Unknown log level '{config.log_level}'")

    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
    ctx.obj = config


@cli.group()
def item() -> None:
    """Manage the item catalog."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def rental() -> None:
    """Issue, return and bill rentals."""


@cli.command("dashboard")
@click.pass_obj
def dashboard(config: AppConfig) -> None:
    """Show headline figures."""
    handler = DashboardHandler(
        customer_repo=customer_repository(config.data_dir),
        item_repo=item_repository(config.data_dir),
        rental_repo=rental_repository(config.data_dir),
    )
    dto = handler.handle()

    click.echo(f"{'Customers':<22} {dto.customers:>12}")
    click.echo(f"{'Catalog items':<22} {dto.items:>12}")
    click.echo(f"{'Active rentals':<22} {dto.active_rentals:>12}")
    click.echo(f"{'Units on rent':<22} {dto.units_on_rent:>12}")
    click.echo(f"{'Booked revenue':<22} {dto.booked_revenue:>12}")
    click.echo(f"{'Outstanding balance':<22} {dto.outstanding_balance:>12}")


# Register subcommands
item.add_command(item_add)
item.add_command(item_list)
item.add_command(item_update_rate)
customer.add_command(customer_add)
customer.add_command(customer_delete)
customer.add_command(customer_list)
customer.add_command(customer_show)
rental.add_command(rental_issue)
rental.add_command(rental_list)
rental.add_command(rental_pay)
rental.add_command(rental_return)
rental.add_command(rental_show)
