"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from shuttering.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from shuttering.infrastructure.persistence.json_item_repository import (
    JsonItemRepository,
)
from shuttering.infrastructure.persistence.json_rental_repository import (
    JsonRentalRepository,
)


def item_repository(data_dir: Path) -> JsonItemRepository:
    return JsonItemRepository(data_dir / "items.json")


def customer_repository(data_dir: Path) -> JsonCustomerRepository:
    return JsonCustomerRepository(data_dir / "customers.json")


def rental_repository(data_dir: Path) -> JsonRentalRepository:
    return JsonRentalRepository(data_dir / "rentals.json")
