"""Application service: Record Payment use case.

Payments are tracked by hand against a rental; no money moves here.
"""

from __future__ import annotations

import logging

from shuttering.domain.exceptions import EntityNotFoundError
from shuttering.domain.model.value_objects import Money
from shuttering.domain.repository.rental_repository import RentalRepository

logger = logging.getLogger(__name__)


class RecordPaymentHandler:

    def __init__(self, rental_repo: RentalRepository) -> None:
        self._rental_repo = rental_repo

    def handle(self, rental_id: str, amount: str) -> None:
        rental = self._rental_repo.get_by_id(rental_id)
        if rental is None:
            raise EntityNotFoundError(f"Rental #{rental_id} not found")

        rental.record_payment(Money.of(amount, rental.currency))
        self._rental_repo.save(rental)
        logger.info(
            "Recorded payment of %s on rental #%s (paid=%s)",
            amount, rental.id, rental.paid_amount,
        )
