"""Item aggregate — a catalog entry and its stock ledger in one.

Each item type (Chali, Balli, Drum, ...) knows its daily rate, how many
units the yard owns, and how many are currently on the shelf.
"""

from __future__ import annotations

from dataclasses import dataclass

from shuttering.domain.exceptions import ValidationError
from shuttering.domain.model.value_objects import Money


@dataclass
class Item:
    """Aggregate root for a rentable item type.

    Invariants:
    - ``available_quantity`` is always >= 0
    - ``available_quantity`` never exceeds ``total_quantity``

    ``available_quantity`` moves only through ``reserve()`` (issue) and
    ``release()`` (return).
    """

    id: str
    name: str
    description: str
    daily_rate: Money
    total_quantity: int
    available_quantity: int

    @staticmethod
    def create(
        id: str,
        name: str,
        description: str,
        daily_rate: Money,
        total_quantity: int,
    ) -> Item:
        """Create a new catalog item with every unit on the shelf."""
        if not name or not name.strip():
            raise ValidationError("Item name is required")
        if total_quantity < 0:
            raise ValidationError("Total quantity cannot be negative")
        return Item(
            id=id,
            name=name.strip(),
            description=description.strip(),
            daily_rate=daily_rate,
            total_quantity=total_quantity,
            available_quantity=total_quantity,
        )

    @property
    def on_rent_quantity(self) -> int:
        return self.total_quantity - self.available_quantity

    def reserve(self, quantity: int) -> None:
        """Take units off the shelf for an issue.

        Raises ValidationError if insufficient stock is available.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if quantity > self.available_quantity:
            raise ValidationError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.available_quantity} available)"
            )
        self.available_quantity -= quantity

    def release(self, quantity: int) -> None:
        """Put returned units back on the shelf."""
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        if quantity > self.on_rent_quantity:
            raise ValidationError(
                f"Cannot release {quantity} of {self.name} "
                f"- only {self.on_rent_quantity} currently on rent"
            )
        self.available_quantity += quantity

    def update_rate(self, new_rate: Money) -> None:
        """Change the daily rate.

        Open rentals keep the rate captured on their lines at issue time.
        """
        self.daily_rate = new_rate
