"""CLI commands for the Customer aggregate."""

from __future__ import annotations

import click

from shuttering.application.add_customer import AddCustomerHandler
from shuttering.application.delete_customer import DeleteCustomerHandler
from shuttering.application.show_customer import CustomerQueries
from shuttering.domain.exceptions import DomainException
from shuttering.infrastructure.bootstrap import customer_repository, rental_repository
from shuttering.infrastructure.config import AppConfig


@click.command("list")
@click.option("--search", default=None, help="Filter by name, phone or address.")
@click.pass_obj
def customer_list(config: AppConfig, search: str | None) -> None:
    """List customers."""
    queries = CustomerQueries(
        customer_repo=customer_repository(config.data_dir),
        rental_repo=rental_repository(config.data_dir),
    )
    customers = queries.find(search=search)

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<5} {'Name':<24} {'Phone':<14} {'Since':<10}")
    click.echo("-" * 56)
    for c in customers:
        click.echo(f"{c.id:<5} {c.name:<24} {c.phone:<14} {c.created_at:<10}")


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Phone number.")
@click.option("--address", default="", help="Postal address.")
@click.pass_obj
def customer_add(config: AppConfig, name: str, phone: str, address: str) -> None:
    """Register a new customer."""
    handler = AddCustomerHandler(customer_repo=customer_repository(config.data_dir))

    try:
        customer = handler.handle(name=name, phone=phone, address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer.id} '{customer.name}' added")


@click.command("show")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.pass_obj
def customer_show(config: AppConfig, customer_id: str) -> None:
    """Show a customer and their rental history."""
    queries = CustomerQueries(
        customer_repo=customer_repository(config.data_dir),
        rental_repo=rental_repository(config.data_dir),
    )

    try:
        detail = queries.show(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    c = detail.customer
    click.echo(f"Customer #{c.id}  {c.name}")
    click.echo(f"Phone:    {c.phone}")
    click.echo(f"Address:  {c.address or '-'}")
    click.echo(f"Since:    {c.created_at}")
    click.echo()

    if not detail.rentals:
        click.echo("No rentals.")
        return

    click.echo(f"  {'Rental':<8} {'Issued':<10} {'Status':<20} {'Booked':>12} {'Balance':>12}")
    click.echo(f"  {'-'*66}")
    for r in detail.rentals:
        click.echo(
            f"  {'#' + str(r.id):<8} {r.issue_date:%Y-%m-%d} {r.status.value:<20} "
            f"{str(r.total_amount):>12} {r.balance:>12.2f}"
        )


@click.command("delete")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.pass_obj
def customer_delete(config: AppConfig, customer_id: str) -> None:
    """Delete a customer (refused while they have items on rent)."""
    handler = DeleteCustomerHandler(
        customer_repo=customer_repository(config.data_dir),
        rental_repo=rental_repository(config.data_dir),
    )

    try:
        handler.handle(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer_id} deleted.")
