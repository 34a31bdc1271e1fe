"""Application service: Process Return use case.

Applies a batch of full and partial returns to one rental, puts the
returned units back on the shelf and persists the result.

The rental is mutated in memory first (it validates every request
before touching a line), then stock is released, and only then is the
rental saved, so a failure at either step leaves the stored rental as
it was.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from shuttering.application.dto import ReturnLineSpec
from shuttering.domain.exceptions import EntityNotFoundError
from shuttering.domain.model.rental import ReturnRequest
from shuttering.domain.repository.item_repository import ItemRepository
from shuttering.domain.repository.rental_repository import RentalRepository
from shuttering.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class ProcessReturnHandler:

    def __init__(
        self,
        rental_repo: RentalRepository,
        item_repo: ItemRepository,
    ) -> None:
        self._rental_repo = rental_repo
        self._item_repo = item_repo

    def handle(
        self,
        rental_id: str,
        returns: list[ReturnLineSpec],
        processed_at: datetime | None = None,
    ) -> None:
        """Process returns; callers re-fetch the rental to see the result."""
        rental = self._rental_repo.get_by_id(rental_id)
        if rental is None:
            raise EntityNotFoundError(f"Rental #{rental_id} not found")

        requests = [
            ReturnRequest(
                line_id=spec.line_id,
                quantity=spec.quantity,
                return_date=spec.return_date,
            )
            for spec in returns
        ]

        released = rental.process_return(
            requests, processed_at=processed_at or datetime.now(timezone.utc)
        )
        InventoryLedger(self._item_repo).release_items(released)

        self._rental_repo.save(rental)
        logger.info(
            "Processed return on rental #%s: %d unit(s) back, status=%s, booked=%s",
            rental.id, sum(released.values()), rental.status.value, rental.total_amount,
        )
