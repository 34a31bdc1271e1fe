"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from shuttering.domain.model.customer import Customer
from shuttering.domain.model.item import Item
from shuttering.domain.model.rental import Rental
from shuttering.domain.model.value_objects import format_amount
from shuttering.domain.service import billing

DATE_FORMAT = "%Y-%m-%d"


# --- Input specs ----------------------------------------------------------------


@dataclass(frozen=True)
class RentalLineSpec:
    """Input: one item type to issue.

    ``daily_rate`` defaults to the catalog rate, ``issue_date`` to the
    moment of issue.
    """

    item_id: str
    quantity: int
    daily_rate: str | None = None
    issue_date: datetime | None = None


@dataclass(frozen=True)
class ReturnLineSpec:
    """Input: how many units of one rental line came back, and when."""

    line_id: str
    quantity: int
    return_date: datetime


# --- Output ---------------------------------------------------------------------


@dataclass(frozen=True)
class RentalLineDTO:
    id: str
    item_name: str
    quantity: int
    daily_rate: str  # formatted, e.g. "₹10.00"
    issue_date: str
    return_date: str | None
    is_returned: bool
    days_rented: int  # days so far for open lines
    amount: str  # booked for returned lines, accrued for open ones


@dataclass(frozen=True)
class RentalDTO:
    """Output: a complete rental as displayed to the user."""

    id: str
    customer_id: str
    customer_name: str
    customer_phone: str
    status: str
    issue_date: str
    return_date: str | None
    items: list[RentalLineDTO]
    total: str  # booked, returned lines only
    paid: str
    balance: str
    accrued: str  # booked plus open lines as of now

    @property
    def has_returns(self) -> bool:
        return any(item.is_returned for item in self.items)


@dataclass(frozen=True)
class CustomerDTO:
    id: str
    name: str
    phone: str
    address: str
    created_at: str


@dataclass(frozen=True)
class ItemDTO:
    id: str
    name: str
    description: str
    daily_rate: str
    total: int
    on_rent: int
    available: int


# --- Mapping --------------------------------------------------------------------


def _fmt_date(value: datetime | None) -> str | None:
    return value.strftime(DATE_FORMAT) if value is not None else None


def rental_to_dto(rental: Rental, as_of: datetime) -> RentalDTO:
    lines = []
    for line in rental.items:
        if line.is_returned:
            days = line.days_rented
        else:
            days = max(billing.days_between(line.issue_date, as_of), 0)
        lines.append(
            RentalLineDTO(
                id=line.id,
                item_name=line.item_name,
                quantity=line.quantity.value,
                daily_rate=str(line.daily_rate),
                issue_date=line.issue_date.strftime(DATE_FORMAT),
                return_date=_fmt_date(line.return_date),
                is_returned=line.is_returned,
                days_rented=days,
                amount=str(billing.accrued_amount(line, as_of)),
            )
        )
    return RentalDTO(
        id=rental.id,  # type: ignore[arg-type]
        customer_id=rental.customer_id,
        customer_name=rental.customer_name,
        customer_phone=rental.customer_phone,
        status=rental.status.value,
        issue_date=rental.issue_date.strftime(DATE_FORMAT),
        return_date=_fmt_date(rental.return_date),
        items=lines,
        total=str(rental.total_amount),
        paid=str(rental.paid_amount),
        balance=format_amount(rental.balance, rental.currency),
        accrued=str(billing.current_liability(rental, as_of)),
    )


def customer_to_dto(customer: Customer) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id,
        name=customer.name,
        phone=customer.phone,
        address=customer.address,
        created_at=customer.created_at.strftime(DATE_FORMAT),
    )


def item_to_dto(item: Item) -> ItemDTO:
    return ItemDTO(
        id=item.id,
        name=item.name,
        description=item.description,
        daily_rate=str(item.daily_rate),
        total=item.total_quantity,
        on_rent=item.on_rent_quantity,
        available=item.available_quantity,
    )
