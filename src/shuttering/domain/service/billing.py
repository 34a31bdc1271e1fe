"""Domain service: Billing.

Pure functions that price rental lines. Nothing here mutates state or
touches a repository, so the same functions back both the booked amounts
written on return and the read-only "what would it cost today" estimate.

Rent is charged per started day: ``ceil((as_of - issue_date) / 1 day)``.
A line returned at the very moment it was issued costs nothing.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from shuttering.domain.model.value_objects import Money

if TYPE_CHECKING:
    from shuttering.domain.model.rental import Rental, RentalLine

_ONE_DAY = timedelta(days=1)


def days_between(issue_date: datetime, as_of: datetime) -> int:
    """Whole days from *issue_date* to *as_of*, rounded up."""
    days, remainder = divmod(as_of - issue_date, _ONE_DAY)
    return days + 1 if remainder else days


def line_amount(line: RentalLine, as_of: datetime) -> Money:
    """Rent owed for the full quantity of *line* if returned at *as_of*."""
    days = days_between(line.issue_date, as_of)
    return line.daily_rate * days * line.quantity.value


def aggregate_total(rental: Rental) -> Money:
    """Booked rent: the sum of ``total_amount`` over returned lines only."""
    result = Money.zero(rental.currency)
    for line in rental.items:
        if line.is_returned:
            result = result + line.total_amount
    return result


def accrued_amount(line: RentalLine, as_of: datetime) -> Money:
    """Running cost of an open line; returned lines report their booked amount."""
    if line.is_returned:
        return line.total_amount
    days = max(days_between(line.issue_date, as_of), 0)
    return line.daily_rate * days * line.quantity.value


def current_liability(rental: Rental, as_of: datetime) -> Money:
    """Booked rent plus what the open lines have accrued by *as_of*.

    A projection for display only; it is never persisted.
    """
    result = Money.zero(rental.currency)
    for line in rental.items:
        result = result + accrued_amount(line, as_of)
    return result
