"""Application service: rental queries.

Read-only lookups used by the CLI (and by any other caller that needs
to display rentals).  Nothing here saves.
"""

from __future__ import annotations

from datetime import datetime, timezone

from shuttering.application.dto import RentalDTO, rental_to_dto
from shuttering.domain.exceptions import EntityNotFoundError, ValidationError
from shuttering.domain.model.rental import Rental, RentalStatus, require_aware
from shuttering.domain.model.value_objects import Money
from shuttering.domain.repository.rental_repository import RentalRepository
from shuttering.domain.service import billing

# filter name -> predicate on a rental's status
RENTAL_FILTERS = {
    "all": lambda status: True,
    "pending": lambda status: status != RentalStatus.RETURNED,
    "issued": lambda status: status == RentalStatus.ISSUED,
    "partially": lambda status: status == RentalStatus.PARTIALLY_RETURNED,
    "returned": lambda status: status == RentalStatus.RETURNED,
}


class RentalQueries:

    def __init__(self, rental_repo: RentalRepository) -> None:
        self._rental_repo = rental_repo

    def get(self, rental_id: str) -> Rental | None:
        return self._rental_repo.get_by_id(rental_id)

    def show(self, rental_id: str, as_of: datetime | None = None) -> RentalDTO:
        rental = self._rental_repo.get_by_id(rental_id)
        if rental is None:
            raise EntityNotFoundError(f"Rental #{rental_id} not found")
        if as_of is None:
            as_of = datetime.now(timezone.utc)
        return rental_to_dto(rental, as_of=require_aware(as_of, "As-of time"))

    def pending_returns(self) -> list[Rental]:
        """Rentals with at least one line still out."""
        return self.find(status_filter="pending")

    def issued(self) -> list[Rental]:
        """Rentals nothing has been returned on yet."""
        return self.find(status_filter="issued")

    def find(self, status_filter: str = "all", search: str | None = None) -> list[Rental]:
        predicate = RENTAL_FILTERS.get(status_filter)
        if predicate is None:
            raise ValidationError(
                f"Unknown rental filter '{status_filter}' "
                f"(expected one of: {', '.join(RENTAL_FILTERS)})"
            )
        return [
            rental
            for rental in self._rental_repo.list_all()
            if predicate(rental.status) and (not search or rental.matches(search))
        ]

    @staticmethod
    def booked_rent(rental: Rental) -> Money:
        """Rent recognised so far: returned lines only."""
        return billing.aggregate_total(rental)
