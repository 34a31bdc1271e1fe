"""Abstract repository for the Customer aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shuttering.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique customer ID."""

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every customer."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new or updated customer."""

    @abstractmethod
    def delete(self, customer_id: str) -> None:
        """Remove a customer record."""
