"""Application service: Update Item Rate use case."""

from __future__ import annotations

import logging

from shuttering.domain.exceptions import EntityNotFoundError
from shuttering.domain.model.value_objects import Money
from shuttering.domain.repository.item_repository import ItemRepository

logger = logging.getLogger(__name__)


class UpdateItemRateHandler:

    def __init__(self, item_repo: ItemRepository) -> None:
        self._item_repo = item_repo

    def handle(self, item_id: str, new_rate: str) -> None:
        """Change an item's daily rate.

        This does NOT affect open rentals - their lines captured a rate
        snapshot at issue time.
        """
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Item with ID '{item_id}' not found")

        item.update_rate(Money.of(new_rate, item.daily_rate.currency))
        self._item_repo.save(item)
        logger.info("Item #%s %s now %s/day", item.id, item.name, item.daily_rate)
