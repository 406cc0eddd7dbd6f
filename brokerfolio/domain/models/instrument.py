"""Domain models for tradable instruments."""

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Instrument classification used to group holdings."""

    SHARE = "share"
    BOND = "bond"
    ETF = "etf"
    CURRENCY = "currency"
    FUTURE = "future"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_instrument_type(cls, instrument_type: str | None) -> "Category | None":
        """Map the broker's ``instrumentType`` string to a category."""
        if not instrument_type:
            return None
        try:
            return cls(instrument_type.strip().lower())
        except ValueError:
            return None


_LABELS = {
    Category.SHARE: "Shares",
    Category.BOND: "Bonds",
    Category.ETF: "Etfs",
    Category.CURRENCY: "Currencies",
    Category.FUTURE: "Futures",
}

# Order in which reports list the categories.
DISPLAY_ORDER = (
    Category.ETF,
    Category.BOND,
    Category.SHARE,
    Category.CURRENCY,
    Category.FUTURE,
)


@dataclass(frozen=True)
class InstrumentInfo:
    """Identity of an instrument as returned by an instrument search."""

    instrument_id: str
    ticker: str
    name: str
    category: Category | None = None


__all__ = ["Category", "DISPLAY_ORDER", "InstrumentInfo"]
