"""Domain service: Inventory Ledger.

Coordinates the cross-aggregate side of issuing and returning: taking
units off an Item's shelf when a rental is issued and putting them back
when lines are returned.

Batch operations are two-phase (validate-then-mutate) so a rental that
asks for more Chali than the yard has never leaves the Balli on the
same rental already deducted.
"""

from __future__ import annotations

import logging

from shuttering.domain.exceptions import EntityNotFoundError, ValidationError
from shuttering.domain.model.item import Item
from shuttering.domain.model.rental import RentalLine
from shuttering.domain.repository.item_repository import ItemRepository

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(self, item_repo: ItemRepository) -> None:
        self._item_repo = item_repo

    def query(self, item_id: str) -> Item | None:
        return self._item_repo.get_by_id(item_id)

    def reserve(self, item_id: str, quantity: int) -> None:
        """Take *quantity* units of one item off the shelf."""
        self.reserve_items({item_id: quantity})

    def release(self, item_id: str, quantity: int) -> None:
        """Put *quantity* units of one item back on the shelf."""
        self.release_items({item_id: quantity})

    def reserve_for_lines(self, lines: list[RentalLine]) -> None:
        """Reserve stock for every line of a new rental.

        Lines for the same item are summed first, so two lines of 40
        Balli against 60 available fail as a whole.
        """
        demand: dict[str, int] = {}
        for line in lines:
            demand[line.item_id] = demand.get(line.item_id, 0) + line.quantity.value
        self.reserve_items(demand)

    def reserve_items(self, quantities: dict[str, int]) -> None:
        """Two-phase reservation of several items.

          Phase 1 - load and validate: every item exists and has enough
                    available stock.  Fails fast before any mutation.
          Phase 2 - mutate and persist.
        """
        loaded = self._load_all(quantities)
        for item, qty in loaded:
            if qty > item.available_quantity:
                raise ValidationError(
                    f"Insufficient stock for {item.name} "
                    f"(need {qty}, have {item.available_quantity} available)"
                )

        for item, qty in loaded:
            item.reserve(qty)
            self._item_repo.save(item)
            logger.debug(
                "Reserved %d x %s (available now %d)",
                qty, item.name, item.available_quantity,
            )

    def release_items(self, quantities: dict[str, int]) -> None:
        """Two-phase release of returned units."""
        loaded = self._load_all(quantities)
        for item, qty in loaded:
            if qty > item.on_rent_quantity:
                raise ValidationError(
                    f"Cannot release {qty} of {item.name} "
                    f"- only {item.on_rent_quantity} currently on rent"
                )

        for item, qty in loaded:
            item.release(qty)
            self._item_repo.save(item)
            logger.debug(
                "Released %d x %s (available now %d)",
                qty, item.name, item.available_quantity,
            )

    # --- Internal helpers -----------------------------------------------------

    def _load_all(self, quantities: dict[str, int]) -> list[tuple[Item, int]]:
        loaded: list[tuple[Item, int]] = []
        for item_id, qty in quantities.items():
            if qty <= 0:
                raise ValidationError("Ledger quantities must be positive")
            item = self._item_repo.get_by_id(item_id)
            if item is None:
                raise EntityNotFoundError(f"Item with ID '{item_id}' not found")
            loaded.append((item, qty))
        return loaded
