"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from shuttering.application.dto import ItemDTO, item_to_dto
from shuttering.domain.repository.item_repository import ItemRepository


class ShowInventoryHandler:

    def __init__(self, item_repo: ItemRepository) -> None:
        self._item_repo = item_repo

    def handle(self, search: str | None = None) -> list[ItemDTO]:
        """List catalog items, optionally filtered by name or description."""
        needle = search.lower() if search else None
        return [
            item_to_dto(item)
            for item in self._item_repo.list_all()
            if needle is None
            or needle in item.name.lower()
            or needle in item.description.lower()
        ]
