"""Abstract repository for the Rental aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shuttering.domain.model.rental import Rental


class RentalRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique rental ID."""

    @abstractmethod
    def get_by_id(self, rental_id: str) -> Rental | None:
        """Return a rental by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Rental]:
        """Return every rental, oldest first."""

    @abstractmethod
    def list_by_customer(self, customer_id: str) -> list[Rental]:
        """Return every rental issued to *customer_id*."""

    @abstractmethod
    def save(self, rental: Rental) -> None:
        """Persist a new or updated rental, assigning an ID if it has none."""
