"""JSON-file-backed implementation of ItemRepository."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path

from shuttering.domain.exceptions import DomainException
from shuttering.domain.model.item import Item
from shuttering.domain.model.value_objects import Money
from shuttering.domain.repository.item_repository import ItemRepository
from shuttering.infrastructure.persistence.json_file import JsonFile
from shuttering.infrastructure.seed import seed_items


class JsonItemRepository(ItemRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, seed_items)

    # --- ItemRepository interface ---------------------------------------------

    def next_id(self) -> str:
        items = self._load()
        if not items:
            return "1"
        return str(max(int(i.id) for i in items) + 1)

    def get_by_id(self, item_id: str) -> Item | None:
        for item in self._load():
            if item.id == item_id:
                return item
        return None

    def get_by_name(self, name: str) -> Item | None:
        for item in self._load():
            if item.name.lower() == name.lower():
                return item
        return None

    def list_all(self) -> list[Item]:
        return self._load()

    def save(self, item: Item) -> None:
        items = self._load()
        replaced = False
        for i, existing in enumerate(items):
            if existing.id == item.id:
                items[i] = item
                replaced = True
                break
        if not replaced:
            items.append(item)
        self._file.persist([self._to_raw(i) for i in items])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: Item) -> dict:
        return {
            "id": item.id,
            "name": item.name,
            "description": item.description,
            "daily_rate": str(item.daily_rate.amount),
            "currency": item.daily_rate.currency,
            "total_quantity": item.total_quantity,
            "available_quantity": item.available_quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Item:
        return Item(
            id=str(raw["id"]),
            name=raw["name"],
            description=raw.get("description", ""),
            daily_rate=Money(Decimal(raw["daily_rate"]), raw.get("currency", "INR")),
            total_quantity=int(raw["total_quantity"]),
            available_quantity=int(raw.get("available_quantity", raw["total_quantity"])),
        )

    def _load(self) -> list[Item]:
        try:
            return [self._to_domain(raw) for raw in self._file.load()]
        except (KeyError, TypeError, ValueError, InvalidOperation, DomainException) as exc:
            return [self._to_domain(raw) for raw in self._file.fallback(exc)]
