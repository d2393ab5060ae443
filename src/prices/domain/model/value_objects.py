"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from prices.domain.exceptions import ValidationError

_CENTS = Decimal("0.01")


def _require_int(name: str, value: object) -> None:
    # bool is an int subclass; True must not pass as identifier 1
    if value is None:
        raise ValidationError(f"{name} cannot be None")
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class ProductId:
    """Catalog identifier of a product. Always positive."""

    value: int

    def __post_init__(self) -> None:
        _require_int("ProductId", self.value)
        if self.value <= 0:
            raise ValidationError(f"ProductId must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BrandId:
    """Identifier of the brand (chain) selling a product. Always positive."""

    value: int

    def __post_init__(self) -> None:
        _require_int("BrandId", self.value)
        if self.value <= 0:
            raise ValidationError(f"BrandId must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PriceListId:
    """Identifier of the pricing campaign a rule belongs to."""

    value: int

    def __post_init__(self) -> None:
        _require_int("PriceListId", self.value)
        if self.value <= 0:
            raise ValidationError(f"PriceListId must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class Priority:
    """Conflict-resolution rank of a pricing rule.

    Higher values win when several rules overlap. Zero is the base level.
    """

    value: int

    def __post_init__(self) -> None:
        _require_int("Priority", self.value)
        if self.value < 0:
            raise ValidationError(f"Priority must be non-negative, got {self.value}")

    def is_higher_than(self, other: Priority) -> bool:
        return self.value > other.value

    def is_lower_than(self, other: Priority) -> bool:
        return self.value < other.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount.

    Uses Decimal to avoid floating-point rounding errors. The amount is
    normalized to two fractional digits (half-up) on construction, so
    ``Money(Decimal("35.5")) == Money(Decimal("35.50"))``.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        object.__setattr__(
            self, "amount", self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
        )

    # --- Comparison -----------------------------------------------------------

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        return self.amount >= other.amount

    def is_greater_than(self, other: Money) -> bool:
        return self > other

    def is_less_than(self, other: Money) -> bool:
        return self < other

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if amount is None or isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
