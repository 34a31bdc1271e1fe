"""Application service: Issue Rental use cases.

Orchestrates the flow between the catalog, the inventory ledger and the
Rental aggregate.  ``IssueRentalHandler`` takes a customer supplied by
the caller; ``ReissueRentalHandler`` looks an existing customer up by id
and delegates to it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from shuttering.application.dto import RentalDTO, RentalLineSpec, rental_to_dto
from shuttering.domain.exceptions import EntityNotFoundError
from shuttering.domain.model.customer import Customer
from shuttering.domain.model.rental import Rental, RentalLine, new_line_id
from shuttering.domain.model.value_objects import Money
from shuttering.domain.repository.customer_repository import CustomerRepository
from shuttering.domain.repository.item_repository import ItemRepository
from shuttering.domain.repository.rental_repository import RentalRepository
from shuttering.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class IssueRentalHandler:

    def __init__(
        self,
        rental_repo: RentalRepository,
        item_repo: ItemRepository,
    ) -> None:
        self._rental_repo = rental_repo
        self._item_repo = item_repo

    def handle(
        self,
        customer: Customer,
        line_specs: list[RentalLineSpec],
        issued_at: datetime | None = None,
    ) -> RentalDTO:
        """Issue items to *customer*.

        Steps:
        1. Resolve each item id to a catalog Item (fail if not found).
        2. Build open RentalLines with the rate snapshot.
        3. Let the Rental aggregate validate the line set.
        4. Take the stock off the shelf (two-phase, all or nothing).
        5. Persist and return a DTO.
        """
        issued_at = issued_at or datetime.now(timezone.utc)

        lines: list[RentalLine] = []
        taken: set[str] = set()
        for spec in line_specs:
            item = self._item_repo.get_by_id(spec.item_id)
            if item is None:
                raise EntityNotFoundError(f"Item with ID '{spec.item_id}' not found")

            if spec.daily_rate is not None:
                rate = Money.of(spec.daily_rate, item.daily_rate.currency)
            else:
                rate = item.daily_rate  # <-- rate snapshot

            line_id = new_line_id(taken)
            taken.add(line_id)
            lines.append(
                RentalLine.open(
                    id=line_id,
                    item_id=item.id,
                    item_name=item.name,
                    quantity=spec.quantity,
                    daily_rate=rate,
                    issue_date=spec.issue_date or issued_at,
                )
            )

        rental = Rental.issue(customer=customer, lines=lines, issued_at=issued_at)

        InventoryLedger(self._item_repo).reserve_for_lines(rental.items)

        self._rental_repo.save(rental)
        logger.info(
            "Issued rental #%s to %s (%d line(s))",
            rental.id, rental.customer_name, len(rental.items),
        )
        return rental_to_dto(rental, as_of=issued_at)


class ReissueRentalHandler:

    def __init__(
        self,
        rental_repo: RentalRepository,
        item_repo: ItemRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._rental_repo = rental_repo
        self._item_repo = item_repo
        self._customer_repo = customer_repo

    def handle(
        self,
        customer_id: str,
        line_specs: list[RentalLineSpec],
        issued_at: datetime | None = None,
    ) -> RentalDTO:
        """Issue a new rental to an existing customer."""
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer with ID '{customer_id}' not found")

        issue = IssueRentalHandler(self._rental_repo, self._item_repo)
        return issue.handle(customer, line_specs, issued_at=issued_at)
