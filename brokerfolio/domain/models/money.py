"""Currency-tagged monetary value."""

from dataclasses import dataclass
from decimal import Decimal
from functools import total_ordering

from brokerfolio.domain.constants import (
    CURRENCY_SYMBOLS,
    DEFAULT_LOCALE,
    DISPLAY_PRECISION,
    LOCALE_SEPARATORS,
)
from brokerfolio.domain.errors import CurrencyMismatchError
from brokerfolio.utils.decimal_utils import coerce_decimal


def currency_symbol(currency: str) -> str:
    """Return the display symbol for a currency code."""
    return CURRENCY_SYMBOLS.get(currency, currency)


@total_ordering
@dataclass(frozen=True)
class Money:
    """Immutable amount of money in a single currency.

    Attributes:
        amount: Exact decimal amount.
        currency: Upper-case ISO 4217 currency code.
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        currency = (self.currency or "").strip().upper()
        if not currency:
            raise ValueError("currency code is required")
        object.__setattr__(self, "currency", currency)
        object.__setattr__(self, "amount", coerce_decimal(self.amount))

    @classmethod
    def of(cls, value, currency: str) -> "Money":
        """Build a Money value from any numeric representation."""
        return cls(coerce_decimal(value), currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        """Return a zero amount in the given currency."""
        return cls(Decimal("0"), currency)

    def _ensure_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def add(self, other: "Money") -> "Money":
        self._ensure_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money") -> "Money":
        self._ensure_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def compare(self, other: "Money") -> int:
        """Return -1, 0 or 1 as this amount is lower, equal or greater."""
        self._ensure_same_currency(other)
        if self.amount < other.amount:
            return -1
        if self.amount > other.amount:
            return 1
        return 0

    def multiply(self, factor) -> "Money":
        return Money(self.amount * coerce_decimal(factor), self.currency)

    def convert(self, rate, target_currency: str) -> "Money":
        """Convert into another currency with a units-of-target rate."""
        return Money(self.amount * coerce_decimal(rate), target_currency)

    def negate(self) -> "Money":
        return Money(-self.amount, self.currency)

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def is_negative(self) -> bool:
        return self.amount < 0

    def format(self, locale: str = DEFAULT_LOCALE) -> str:
        """Render the amount with locale grouping and the currency symbol.

        Args:
            locale: Locale name such as ``en_US`` or ``ru_RU``.

        Returns:
            str: Text like ``1,234.50 $`` rounded to display precision.
        """
        group, point = LOCALE_SEPARATORS.get(
            locale,
            LOCALE_SEPARATORS[DEFAULT_LOCALE],
        )
        rendered = f"{self.amount:,.{DISPLAY_PRECISION}f}"
        rendered = (
            rendered.replace(",", "\0").replace(".", point).replace("\0", group)
        )
        return f"{rendered} {currency_symbol(self.currency)}"

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __lt__(self, other: "Money") -> bool:
        return self.compare(other) < 0

    def __str__(self) -> str:
        return self.format()


__all__ = ["Money", "currency_symbol"]
