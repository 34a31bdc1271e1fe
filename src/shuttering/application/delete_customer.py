"""Application service: Delete Customer use case.

A customer can only be removed once every rental issued to them has
been fully returned.
"""

from __future__ import annotations

import logging

from shuttering.domain.exceptions import ConflictError, EntityNotFoundError
from shuttering.domain.model.rental import RentalStatus
from shuttering.domain.repository.customer_repository import CustomerRepository
from shuttering.domain.repository.rental_repository import RentalRepository

logger = logging.getLogger(__name__)


class DeleteCustomerHandler:

    def __init__(
        self,
        customer_repo: CustomerRepository,
        rental_repo: RentalRepository,
    ) -> None:
        self._customer_repo = customer_repo
        self._rental_repo = rental_repo

    def handle(self, customer_id: str) -> None:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer with ID '{customer_id}' not found")

        active = [
            rental
            for rental in self._rental_repo.list_by_customer(customer_id)
            if rental.status != RentalStatus.RETURNED
        ]
        if active:
            raise ConflictError(
                f"Cannot delete customer {customer.name} with active rentals "
                f"({', '.join('#' + str(r.id) for r in active)})"
            )

        self._customer_repo.delete(customer_id)
        logger.info("Deleted customer #%s %s", customer.id, customer.name)
