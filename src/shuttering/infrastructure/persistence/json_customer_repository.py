"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from shuttering.domain.exceptions import DomainException
from shuttering.domain.model.customer import Customer
from shuttering.domain.repository.customer_repository import CustomerRepository
from shuttering.infrastructure.persistence.json_file import JsonFile
from shuttering.infrastructure.seed import seed_customers


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, seed_customers)

    # --- CustomerRepository interface -----------------------------------------

    def next_id(self) -> str:
        customers = self._load()
        if not customers:
            return "1"
        return str(max(int(cid) for cid in customers) + 1)

    def get_by_id(self, customer_id: str) -> Customer | None:
        return self._load().get(customer_id)

    def list_all(self) -> list[Customer]:
        return list(self._load().values())

    def save(self, customer: Customer) -> None:
        customers = self._load()
        customers[customer.id] = customer
        self._persist(customers)

    def delete(self, customer_id: str) -> None:
        customers = self._load()
        customers.pop(customer_id, None)
        self._persist(customers)

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=str(raw["id"]),
            name=raw["name"],
            phone=raw["phone"],
            address=raw.get("address", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    def _load(self) -> dict[str, Customer]:
        try:
            customers = [self._to_domain(raw) for raw in self._file.load()]
        except (KeyError, TypeError, ValueError, DomainException) as exc:
            customers = [self._to_domain(raw) for raw in self._file.fallback(exc)]
        return {c.id: c for c in customers}

    def _persist(self, customers: dict[str, Customer]) -> None:
        self._file.persist(
            [
                {
                    "id": c.id,
                    "name": c.name,
                    "phone": c.phone,
                    "address": c.address,
                    "created_at": c.created_at.isoformat(),
                }
                for c in customers.values()
            ]
        )
