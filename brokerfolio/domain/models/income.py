"""Profit or loss paired with its percentage yield."""

from dataclasses import dataclass
from decimal import Decimal

from brokerfolio.domain.constants import DEFAULT_LOCALE, DISPLAY_PRECISION
from brokerfolio.domain.models.money import Money


@dataclass(frozen=True)
class Income:
    """Income derived from a current value and its cost basis.

    Instances come from ``derive_income``; the percent keeps full precision
    and is only rounded when formatted.

    Attributes:
        absolute: Current value minus cost basis.
        percent: Absolute income as a percentage of the cost basis.
    """

    absolute: Money
    percent: Decimal

    @property
    def currency(self) -> str:
        return self.absolute.currency

    def is_zero(self) -> bool:
        return self.absolute.is_zero()

    def is_negative(self) -> bool:
        return self.absolute.is_negative()

    def rounded_percent(self) -> Decimal:
        return round(self.percent, DISPLAY_PRECISION)

    def format(self, locale: str = DEFAULT_LOCALE) -> str:
        return f"{self.absolute.format(locale)} ({self.rounded_percent()}%)"

    def __str__(self) -> str:
        return self.format()


__all__ = ["Income"]
