"""Domain models for raw records supplied by the broker API."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from brokerfolio.domain.models.instrument import Category
from brokerfolio.domain.models.money import Money


@dataclass(frozen=True)
class RawPosition:
    """Row representing one portfolio position."""

    instrument_id: str
    ticker: str
    name: str
    category: Category
    quantity: Decimal
    average_price: Money
    current_price: Money

    @property
    def currency(self) -> str:
        return self.current_price.currency


@dataclass(frozen=True)
class RawOperation:
    """Row representing one executed operation on an instrument."""

    operation_id: str
    instrument_id: str
    timestamp: datetime
    operation_type: str
    currency: str
    payment: Money | None = None
    price: Money | None = None
    quantity: Decimal = Decimal("0")
    quantity_rest: Decimal = Decimal("0")
    description: str = ""
    state: str = ""


__all__ = ["RawPosition", "RawOperation"]
