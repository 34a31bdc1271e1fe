"""Abstract repository for the Item aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shuttering.domain.model.item import Item


class ItemRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique item ID."""

    @abstractmethod
    def get_by_id(self, item_id: str) -> Item | None:
        """Return an item by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Item | None:
        """Return an item by its exact name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Item]:
        """Return every item in the catalog."""

    @abstractmethod
    def save(self, item: Item) -> None:
        """Persist a new or updated item."""
