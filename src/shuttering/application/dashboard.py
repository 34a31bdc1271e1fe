"""Application service: Dashboard summary (query)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from shuttering.domain.model.rental import RentalStatus
from shuttering.domain.model.value_objects import DEFAULT_CURRENCY, Money, format_amount
from shuttering.domain.repository.customer_repository import CustomerRepository
from shuttering.domain.repository.item_repository import ItemRepository
from shuttering.domain.repository.rental_repository import RentalRepository


@dataclass(frozen=True)
class DashboardDTO:
    customers: int
    items: int
    active_rentals: int
    units_on_rent: int
    booked_revenue: str
    outstanding_balance: str


class DashboardHandler:

    def __init__(
        self,
        customer_repo: CustomerRepository,
        item_repo: ItemRepository,
        rental_repo: RentalRepository,
    ) -> None:
        self._customer_repo = customer_repo
        self._item_repo = item_repo
        self._rental_repo = rental_repo

    def handle(self) -> DashboardDTO:
        rentals = self._rental_repo.list_all()
        booked = Money.zero()
        outstanding = Decimal("0")
        for rental in rentals:
            booked = booked + rental.total_amount
            outstanding += rental.balance

        items = self._item_repo.list_all()
        return DashboardDTO(
            customers=len(self._customer_repo.list_all()),
            items=len(items),
            active_rentals=sum(1 for r in rentals if r.status != RentalStatus.RETURNED),
            units_on_rent=sum(item.on_rent_quantity for item in items),
            booked_revenue=str(booked),
            outstanding_balance=format_amount(outstanding, DEFAULT_CURRENCY),
        )
