"""Application service: Add Item use case."""

from __future__ import annotations

import logging

from shuttering.domain.exceptions import ValidationError
from shuttering.domain.model.item import Item
from shuttering.domain.model.value_objects import Money
from shuttering.domain.repository.item_repository import ItemRepository

logger = logging.getLogger(__name__)


class AddItemHandler:

    def __init__(self, item_repo: ItemRepository) -> None:
        self._item_repo = item_repo

    def handle(
        self,
        name: str,
        daily_rate: str,
        total_quantity: int,
        description: str = "",
    ) -> Item:
        """Add a new item type to the catalog with all units available."""
        if not name or not name.strip():
            raise ValidationError("Item name is required")

        existing = self._item_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Item '{name}' already exists")

        item = Item.create(
            id=self._item_repo.next_id(),
            name=name,
            description=description,
            daily_rate=Money.of(daily_rate),
            total_quantity=total_quantity,
        )
        self._item_repo.save(item)
        logger.info("Added item #%s %s at %s/day", item.id, item.name, item.daily_rate)
        return item
