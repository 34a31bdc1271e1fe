"""Application service: customer queries."""

from __future__ import annotations

from dataclasses import dataclass

from shuttering.application.dto import CustomerDTO, customer_to_dto
from shuttering.domain.exceptions import EntityNotFoundError
from shuttering.domain.model.rental import Rental
from shuttering.domain.repository.customer_repository import CustomerRepository
from shuttering.domain.repository.rental_repository import RentalRepository


@dataclass(frozen=True)
class CustomerDetail:
    customer: CustomerDTO
    rentals: list[Rental]


class CustomerQueries:

    def __init__(
        self,
        customer_repo: CustomerRepository,
        rental_repo: RentalRepository,
    ) -> None:
        self._customer_repo = customer_repo
        self._rental_repo = rental_repo

    def find(self, search: str | None = None) -> list[CustomerDTO]:
        return [
            customer_to_dto(c)
            for c in self._customer_repo.list_all()
            if not search or c.matches(search)
        ]

    def show(self, customer_id: str) -> CustomerDetail:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer with ID '{customer_id}' not found")
        return CustomerDetail(
            customer=customer_to_dto(customer),
            rentals=self._rental_repo.list_by_customer(customer_id),
        )
