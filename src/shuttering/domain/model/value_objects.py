"""Value Objects for rent and stock counts.

Both are frozen and validate on construction, so a negative rate or a
zero-unit line cannot be built in the first place.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from shuttering.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "INR"

_SYMBOLS = {"INR": "₹", "USD": "$"}


@dataclass(frozen=True)
class Money:
    """A non-negative rupee (or other currency) amount.

    Decimal keeps fractional daily rates such as ₹0.50 for rope exact
    when multiplied out over days and units.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Amount must be a finite number, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Amount cannot be negative, got {self.amount}")

    def __add__(self, other: Money) -> Money:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot add {other.currency} to {self.currency}"
            )
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        # days and units are whole numbers; a float here is a bug upstream
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Money scales by whole numbers only, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __str__(self) -> str:
        return format_amount(self.amount, self.currency)

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build from user or file input; ``0.5`` and ``"0.5"`` are equal."""
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return Money(value, currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)


def format_amount(amount: Decimal, currency: str = DEFAULT_CURRENCY) -> str:
    """Render a signed amount, e.g. ``₹600.00`` or ``-₹50.00``."""
    symbol = _SYMBOLS.get(currency, currency + " ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):.2f}"


@dataclass(frozen=True)
class Quantity:
    """Units of one item on a rental line; always a whole number above zero."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be a whole number, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError(f"Quantity must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)
