"""CLI commands for the Rental aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from shuttering.application.add_customer import AddCustomerHandler
from shuttering.application.dto import RentalDTO, RentalLineSpec, ReturnLineSpec
from shuttering.application.issue_rental import IssueRentalHandler, ReissueRentalHandler
from shuttering.application.process_return import ProcessReturnHandler
from shuttering.application.record_payment import RecordPaymentHandler
from shuttering.application.show_rental import RENTAL_FILTERS, RentalQueries
from shuttering.domain.exceptions import DomainException
from shuttering.infrastructure.bootstrap import (
    customer_repository,
    item_repository,
    rental_repository,
)
from shuttering.infrastructure.cli.parsing import DATE_TYPE, as_utc, parse_pairs
from shuttering.infrastructure.config import AppConfig


def _display_rental(dto: RentalDTO) -> None:
    """Shared formatting for displaying a rental."""
    click.echo(f"Rental #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}  {dto.customer_phone}")
    click.echo(f"Issued:   {dto.issue_date}")
    if dto.return_date:
        click.echo(f"Returned: {dto.return_date}")
    click.echo()

    click.echo(
        f"  {'Line':<9} {'Item':<10} {'Qty':>5} {'Rate':>8} {'Issued':<10} "
        f"{'Returned':<10} {'Days':>5} {'Amount':>12}"
    )
    click.echo(f"  {'-'*76}")
    for item in dto.items:
        amount = item.amount if item.is_returned else f"({item.amount})"
        click.echo(
            f"  {item.id:<9} {item.item_name:<10} {item.quantity:>5} {item.daily_rate:>8} "
            f"{item.issue_date:<10} {item.return_date or '-':<10} "
            f"{item.days_rented:>5} {amount:>12}"
        )
    click.echo(f"  {'-'*76}")
    click.echo(f"  {'Booked rent':<30} {dto.total:>46}")
    click.echo(f"  {'Paid':<30} {dto.paid:>46}")
    click.echo(f"  {'Balance':<30} {dto.balance:>46}")
    if dto.status != "returned":
        click.echo(f"  {'Accrued incl. open lines':<30} {dto.accrued:>46}")


@click.command("issue")
@click.option("--customer-id", default=None, help="Existing customer ID.")
@click.option("--name", default=None, help="New customer name.")
@click.option("--phone", default=None, help="New customer phone.")
@click.option("--address", default="", help="New customer address.")
@click.option("--items", required=True, help="Items as 'ItemID:Qty,ItemID:Qty'.")
@click.option("--date", "issue_date", type=DATE_TYPE, default=None, help="Issue date (default: now).")
@click.pass_obj
def rental_issue(
    config: AppConfig,
    customer_id: str | None,
    name: str | None,
    phone: str | None,
    address: str,
    items: str,
    issue_date: datetime | None,
) -> None:
    """Issue items to an existing or a new customer."""
    if customer_id is None and name is None:
        raise click.ClickException("Give --customer-id, or --name and --phone for a new customer")
    if customer_id is not None and name is not None:
        raise click.ClickException("--customer-id and --name are mutually exclusive")

    issued_at = as_utc(issue_date)
    specs = [
        RentalLineSpec(item_id=item_id, quantity=qty, issue_date=issued_at)
        for item_id, qty in parse_pairs(items, "ItemID")
    ]

    rentals = rental_repository(config.data_dir)
    catalog = item_repository(config.data_dir)
    customers = customer_repository(config.data_dir)

    try:
        if customer_id is not None:
            handler = ReissueRentalHandler(rentals, catalog, customers)
            dto = handler.handle(customer_id, specs, issued_at=issued_at)
        else:
            customer = AddCustomerHandler(customers).handle(
                name=name, phone=phone or "", address=address
            )
            dto = IssueRentalHandler(rentals, catalog).handle(
                customer, specs, issued_at=issued_at
            )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Rental #{dto.id} issued to {dto.customer_name}")
    click.echo()
    _display_rental(dto)


@click.command("return")
@click.option("--id", "rental_id", required=True, help="Rental ID.")
@click.option("--lines", "lines_str", default=None, help="Lines as 'LineID:Qty,LineID:Qty'.")
@click.option("--all", "return_all", is_flag=True, default=False, help="Return every open line in full.")
@click.option("--date", "return_date", type=DATE_TYPE, default=None, help="Return date (default: now).")
@click.pass_obj
def rental_return(
    config: AppConfig,
    rental_id: str,
    lines_str: str | None,
    return_all: bool,
    return_date: datetime | None,
) -> None:
    """Take items back, fully or partially."""
    if return_all == bool(lines_str):
        raise click.ClickException("Give exactly one of --lines or --all")

    returned_at = as_utc(return_date)
    rentals = rental_repository(config.data_dir)

    if return_all:
        rental = RentalQueries(rentals).get(rental_id)
        if rental is None:
            raise click.ClickException(f"Rental #{rental_id} not found")
        pairs = [(line.id, line.quantity.value) for line in rental.open_lines]
    else:
        pairs = parse_pairs(lines_str, "LineID")

    specs = [
        ReturnLineSpec(line_id=line_id, quantity=qty, return_date=returned_at)
        for line_id, qty in pairs
    ]
    handler = ProcessReturnHandler(rentals, item_repository(config.data_dir))

    try:
        handler.handle(rental_id, specs)
        dto = RentalQueries(rentals).show(rental_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Return processed on rental #{rental_id}.")
    click.echo()
    _display_rental(dto)


@click.command("show")
@click.option("--id", "rental_id", required=True, help="Rental ID to display.")
@click.pass_obj
def rental_show(config: AppConfig, rental_id: str) -> None:
    """Show details of a rental."""
    queries = RentalQueries(rental_repository(config.data_dir))

    try:
        dto = queries.show(rental_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_rental(dto)


@click.command("list")
@click.option(
    "--filter", "status_filter",
    type=click.Choice(list(RENTAL_FILTERS)), default="all", show_default=True,
    help="Restrict by status.",
)
@click.option("--search", default=None, help="Match customer, rental id or item name.")
@click.pass_obj
def rental_list(config: AppConfig, status_filter: str, search: str | None) -> None:
    """List rentals."""
    queries = RentalQueries(rental_repository(config.data_dir))
    rentals = queries.find(status_filter=status_filter, search=search)

    if not rentals:
        click.echo("No rentals found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<22} {'Issued':<10} {'Status':<20} {'Lines':>5} {'Booked':>12}")
    click.echo("-" * 80)
    for r in rentals:
        click.echo(
            f"{r.id:<6} {r.customer_name:<22} {r.issue_date:%Y-%m-%d} "
            f"{r.status.value:<20} {len(r.items):>5} {str(r.total_amount):>12}"
        )


@click.command("pay")
@click.option("--id", "rental_id", required=True, help="Rental ID.")
@click.option("--amount", required=True, help="Amount received (e.g. 500).")
@click.pass_obj
def rental_pay(config: AppConfig, rental_id: str, amount: str) -> None:
    """Record a payment against a rental."""
    rentals = rental_repository(config.data_dir)
    handler = RecordPaymentHandler(rental_repo=rentals)

    try:
        handler.handle(rental_id, amount)
        dto = RentalQueries(rentals).show(rental_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Payment recorded on rental #{rental_id}. Balance now {dto.balance}")
