"""Rental aggregate — the core of the domain.

A Rental is one customer transaction. It owns its lines; each line is a
batch of a single item type with its own issue date, quantity and locked
daily rate. Returns move lines from open to returned, splitting a line in
two when only part of it comes back.

``status``, ``total_amount`` and ``balance`` are never patched by hand:
``recompute()`` derives them from the line set after every mutation.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from shuttering.domain.exceptions import ValidationError
from shuttering.domain.model.customer import Customer
from shuttering.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from shuttering.domain.service import billing


class RentalStatus(Enum):
    ISSUED = "issued"
    PARTIALLY_RETURNED = "partially_returned"
    RETURNED = "returned"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def require_aware(value: datetime, what: str) -> datetime:
    """Reject naive datetimes; stored dates and ``now`` are all UTC-aware."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(f"{what} must carry a timezone, got {value.isoformat()}")
    return value


def new_line_id(taken: set[str] | frozenset[str] = frozenset()) -> str:
    """Generate a short line id not already used in *taken*."""
    while True:
        candidate = uuid.uuid4().hex[:8]
        if candidate not in taken:
            return candidate


@dataclass
class RentalLine:
    """One issued batch of a single item type.

    ``daily_rate`` is a snapshot of the catalog rate at issue time so
    later catalog edits never re-price an open rental.  Once
    ``is_returned`` is set the line is never changed again.
    """

    id: str
    item_id: str
    item_name: str
    quantity: Quantity
    daily_rate: Money  # locked at issue time
    issue_date: datetime
    return_date: datetime | None = None
    is_returned: bool = False
    days_rented: int = 0
    total_amount: Money = field(default_factory=Money.zero)

    @staticmethod
    def open(
        id: str,
        item_id: str,
        item_name: str,
        quantity: int,
        daily_rate: Money,
        issue_date: datetime,
    ) -> RentalLine:
        return RentalLine(
            id=id,
            item_id=item_id,
            item_name=item_name,
            quantity=Quantity(quantity),
            daily_rate=daily_rate,
            issue_date=issue_date,
            total_amount=Money.zero(daily_rate.currency),
        )

    def returned(self, return_date: datetime) -> RentalLine:
        """A billed copy of this line, returned in full at *return_date*."""
        return replace(
            self,
            return_date=return_date,
            is_returned=True,
            days_rented=billing.days_between(self.issue_date, return_date),
            total_amount=billing.line_amount(self, return_date),
        )

    def split(
        self, quantity: int, return_date: datetime, remainder_id: str
    ) -> tuple[RentalLine, ...]:
        """Return *quantity* units, leaving the rest on rent.

        Yields one line for a full return, or two for a partial one: the
        returned portion keeps this line's id, the remainder is a fresh
        open line under *remainder_id* with the same item, rate and issue
        date.
        """
        remaining = self.quantity.value - quantity
        if remaining == 0:
            return (self.returned(return_date),)

        returned_portion = replace(self, quantity=Quantity(quantity)).returned(return_date)
        remainder = RentalLine.open(
            id=remainder_id,
            item_id=self.item_id,
            item_name=self.item_name,
            quantity=remaining,
            daily_rate=self.daily_rate,
            issue_date=self.issue_date,
        )
        return (returned_portion, remainder)


@dataclass(frozen=True)
class ReturnRequest:
    """Caller input: bring back *quantity* units of line *line_id*."""

    line_id: str
    quantity: int
    return_date: datetime


def derive_status(lines: list[RentalLine]) -> RentalStatus:
    """Status as a pure function of the line set."""
    if lines and all(line.is_returned for line in lines):
        return RentalStatus.RETURNED
    if any(line.is_returned for line in lines):
        return RentalStatus.PARTIALLY_RETURNED
    return RentalStatus.ISSUED


@dataclass
class Rental:
    """Aggregate root for a rental transaction.

    Use the ``Rental.issue()`` factory for new rentals.  The ``__init__``
    is intentionally simple so the repository can reconstitute persisted
    rentals without re-validating.
    """

    id: str | None
    customer_id: str
    customer_name: str  # snapshot at issue time
    customer_phone: str
    items: list[RentalLine]
    issue_date: datetime = field(default_factory=_utcnow)
    return_date: datetime | None = None
    status: RentalStatus = RentalStatus.ISSUED
    total_amount: Money = field(default_factory=Money.zero)
    paid_amount: Money = field(default_factory=Money.zero)
    balance: Decimal = Decimal("0")

    # --- Factory (used for NEW rentals only) ----------------------------------

    @staticmethod
    def issue(
        customer: Customer,
        lines: list[RentalLine],
        issued_at: datetime | None = None,
        currency: str = DEFAULT_CURRENCY,
    ) -> Rental:
        """Create a new rental in ``issued`` state.

        Stock reservation must happen separately via the inventory
        ledger (coordinated by the application handler).
        """
        if not lines:
            raise ValidationError("Rental must contain at least one item")
        if any(line.is_returned for line in lines):
            raise ValidationError("New rental lines must be open")
        ids = [line.id for line in lines]
        if len(set(ids)) != len(ids):
            raise ValidationError("Rental line ids must be unique")
        if issued_at is not None:
            require_aware(issued_at, "Issue date")
        for line in lines:
            require_aware(line.issue_date, f"Issue date of {line.item_name}")

        rental = Rental(
            id=None,
            customer_id=customer.id,
            customer_name=customer.name,
            customer_phone=customer.phone,
            items=list(lines),
            issue_date=issued_at or _utcnow(),
            total_amount=Money.zero(currency),
            paid_amount=Money.zero(currency),
        )
        rental.recompute()
        return rental

    # --- State transitions ----------------------------------------------------

    def process_return(
        self,
        requests: list[ReturnRequest],
        processed_at: datetime | None = None,
    ) -> dict[str, int]:
        """Apply a batch of return requests to this rental.

        Every request is checked before any line changes, so a bad
        request leaves the rental untouched.  Lines without a request
        pass through; the rest become one (full return) or two (partial
        return) lines.

        Returns the quantity to put back on the shelf per item id,
        resolved through the lines as they were before the split.
        """
        by_line = self._validate_requests(requests)
        if processed_at is not None:
            require_aware(processed_at, "Processing time")

        taken = {line.id for line in self.items}
        updated: list[RentalLine] = []
        released: dict[str, int] = {}
        for line in self.items:
            request = by_line.get(line.id)
            if request is None:
                updated.append(line)
                continue
            remainder_id = new_line_id(taken)
            taken.add(remainder_id)
            updated.extend(line.split(request.quantity, request.return_date, remainder_id))
            released[line.item_id] = released.get(line.item_id, 0) + request.quantity

        self.items = updated
        self.recompute()
        if self.status == RentalStatus.RETURNED:
            self.return_date = processed_at or _utcnow()
        return released

    def record_payment(self, amount: Money) -> None:
        """Add a payment towards this rental and refresh the balance."""
        if amount.amount <= 0:
            raise ValidationError("Payment amount must be positive")
        self.paid_amount = self.paid_amount + amount
        self.recompute()

    def recompute(self) -> None:
        """Re-derive status, booked total and balance from the lines."""
        self.total_amount = billing.aggregate_total(self)
        self.balance = self.total_amount.amount - self.paid_amount.amount
        self.status = derive_status(self.items)

    # --- Computed properties --------------------------------------------------

    @property
    def currency(self) -> str:
        return self.paid_amount.currency

    @property
    def open_lines(self) -> list[RentalLine]:
        return [line for line in self.items if not line.is_returned]

    @property
    def returned_lines(self) -> list[RentalLine]:
        return [line for line in self.items if line.is_returned]

    @property
    def quantity_on_rent(self) -> dict[str, int]:
        """Units still out per item id."""
        result: dict[str, int] = {}
        for line in self.open_lines:
            result[line.item_id] = result.get(line.item_id, 0) + line.quantity.value
        return result

    def matches(self, term: str) -> bool:
        """Case-insensitive search over customer name, rental id and item names."""
        needle = term.lower()
        return (
            needle in self.customer_name.lower()
            or needle in str(self.id).lower()
            or any(needle in line.item_name.lower() for line in self.items)
        )

    # --- Internal helpers -----------------------------------------------------

    def find_line(self, line_id: str) -> RentalLine:
        for line in self.items:
            if line.id == line_id:
                return line
        raise ValidationError(f"Line '{line_id}' not found in rental #{self.id}")

    def _validate_requests(
        self, requests: list[ReturnRequest]
    ) -> dict[str, ReturnRequest]:
        if self.status == RentalStatus.RETURNED:
            raise ValidationError(f"Rental #{self.id} is already fully returned")
        if not requests:
            raise ValidationError("Must specify at least one line to return")

        by_line: dict[str, ReturnRequest] = {}
        for request in requests:
            if request.line_id in by_line:
                raise ValidationError(
                    f"Line '{request.line_id}' appears more than once in this return"
                )
            line = self.find_line(request.line_id)
            if line.is_returned:
                raise ValidationError(
                    f"Line '{line.id}' ({line.item_name}) has already been returned"
                )
            if request.quantity <= 0:
                raise ValidationError("Return quantity must be positive")
            if request.quantity > line.quantity.value:
                raise ValidationError(
                    f"Cannot return {request.quantity} of {line.item_name} "
                    f"- only {line.quantity.value} on rent in line '{line.id}'"
                )
            require_aware(request.return_date, f"Return date of line '{line.id}'")
            if request.return_date < line.issue_date:
                raise ValidationError(
                    f"Return date {request.return_date:%Y-%m-%d} is before the "
                    f"issue date {line.issue_date:%Y-%m-%d} of {line.item_name}"
                )
            by_line[request.line_id] = request
        return by_line
