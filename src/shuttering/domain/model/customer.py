"""Customer aggregate.

Customers are referenced from rentals by id only; rentals keep their own
snapshot of the name and phone taken at issue time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from shuttering.domain.exceptions import ValidationError


@dataclass
class Customer:

    id: str
    name: str
    phone: str
    address: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(id: str, name: str, phone: str, address: str = "") -> Customer:
        """Create a new customer, enforcing the required fields."""
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        if not phone or not phone.strip():
            raise ValidationError("Phone number is required")
        return Customer(
            id=id,
            name=name.strip(),
            phone=phone.strip(),
            address=(address or "").strip(),
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on name, phone or address."""
        needle = term.lower()
        return (
            needle in self.name.lower()
            or needle in self.phone.lower()
            or needle in self.address.lower()
        )
