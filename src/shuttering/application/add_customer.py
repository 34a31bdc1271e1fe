"""Application service: Add Customer use case."""

from __future__ import annotations

import logging

from shuttering.domain.model.customer import Customer
from shuttering.domain.repository.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class AddCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, name: str, phone: str, address: str = "") -> Customer:
        """Register a new customer; ``created_at`` is stamped here, once."""
        customer = Customer.create(
            id=self._customer_repo.next_id(),
            name=name,
            phone=phone,
            address=address,
        )
        self._customer_repo.save(customer)
        logger.info("Added customer #%s %s", customer.id, customer.name)
        return customer
