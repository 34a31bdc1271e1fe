"""JSON-file-backed implementation of RentalRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from shuttering.domain.exceptions import DomainException
from shuttering.domain.model.rental import Rental, RentalLine, RentalStatus
from shuttering.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from shuttering.domain.repository.rental_repository import RentalRepository
from shuttering.infrastructure.persistence.json_file import JsonFile
from shuttering.infrastructure.seed import seed_rentals


class JsonRentalRepository(RentalRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, seed_rentals)

    # --- RentalRepository interface -------------------------------------------

    def next_id(self) -> str:
        rentals = self._load()
        if not rentals:
            return "1"
        return str(max(int(r.id) for r in rentals) + 1)

    def get_by_id(self, rental_id: str) -> Rental | None:
        for rental in self._load():
            if rental.id == rental_id:
                return rental
        return None

    def list_all(self) -> list[Rental]:
        return self._load()

    def list_by_customer(self, customer_id: str) -> list[Rental]:
        return [r for r in self._load() if r.customer_id == customer_id]

    def save(self, rental: Rental) -> None:
        rentals = self._load()

        if rental.id is None:
            rental.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, existing in enumerate(rentals):
            if existing.id == rental.id:
                rentals[i] = rental
                replaced = True
                break
        if not replaced:
            rentals.append(rental)

        self._file.persist([self._to_raw(r) for r in rentals])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(rental: Rental) -> dict:
        return {
            "id": rental.id,
            "customer_id": rental.customer_id,
            "customer_name": rental.customer_name,
            "customer_phone": rental.customer_phone,
            "issue_date": rental.issue_date.isoformat(),
            "return_date": _iso(rental.return_date),
            "status": rental.status.value,
            "currency": rental.currency,
            "total_amount": str(rental.total_amount.amount),
            "paid_amount": str(rental.paid_amount.amount),
            "balance": str(rental.balance),
            "items": [
                {
                    "id": line.id,
                    "item_id": line.item_id,
                    "item_name": line.item_name,
                    "quantity": line.quantity.value,
                    "daily_rate": str(line.daily_rate.amount),
                    "issue_date": line.issue_date.isoformat(),
                    "return_date": _iso(line.return_date),
                    "is_returned": line.is_returned,
                    "days_rented": line.days_rented,
                    "total_amount": str(line.total_amount.amount),
                }
                for line in rental.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Rental:
        currency = raw.get("currency", DEFAULT_CURRENCY)
        lines = [
            RentalLine(
                id=str(i["id"]),
                item_id=str(i["item_id"]),
                item_name=i["item_name"],
                quantity=Quantity(int(i["quantity"])),
                daily_rate=Money(Decimal(i["daily_rate"]), currency),
                issue_date=datetime.fromisoformat(i["issue_date"]),
                return_date=_parse(i.get("return_date")),
                is_returned=bool(i.get("is_returned", False)),
                days_rented=int(i.get("days_rented", 0)),
                total_amount=Money(Decimal(i.get("total_amount", "0")), currency),
            )
            for i in raw["items"]
        ]
        return Rental(
            id=str(raw["id"]),
            customer_id=str(raw["customer_id"]),
            customer_name=raw["customer_name"],
            customer_phone=raw.get("customer_phone", ""),
            items=lines,
            issue_date=datetime.fromisoformat(raw["issue_date"]),
            return_date=_parse(raw.get("return_date")),
            status=RentalStatus(raw["status"]),
            total_amount=Money(Decimal(raw.get("total_amount", "0")), currency),
            paid_amount=Money(Decimal(raw.get("paid_amount", "0")), currency),
            balance=Decimal(raw.get("balance", "0")),
        )

    def _load(self) -> list[Rental]:
        try:
            return [self._to_domain(raw) for raw in self._file.load()]
        except (KeyError, TypeError, ValueError, InvalidOperation, DomainException) as exc:
            return [self._to_domain(raw) for raw in self._file.fallback(exc)]


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
