"""Domain models for a single instrument position."""

from dataclasses import dataclass
from decimal import Decimal

from brokerfolio.domain.errors import CurrencyMismatchError
from brokerfolio.domain.models.income import Income
from brokerfolio.domain.models.money import Money


@dataclass(frozen=True)
class OperationTotals:
    """Per-instrument sums of income, tax and fee operations.

    Attributes:
        dividends_and_coupons: Dividends and coupons received.
        taxes: Taxes withheld from those payments (negative amounts).
        fees: Broker and service fees (negative amounts).
    """

    dividends_and_coupons: Money
    taxes: Money
    fees: Money

    @classmethod
    def zero(cls, currency: str) -> "OperationTotals":
        return cls(
            dividends_and_coupons=Money.zero(currency),
            taxes=Money.zero(currency),
            fees=Money.zero(currency),
        )

    @property
    def net_payments(self) -> Money:
        """Dividends and coupons after withheld taxes."""
        return self.dividends_and_coupons + self.taxes


@dataclass(frozen=True)
class Paper:
    """Position in one tradable instrument for a portfolio snapshot.

    Attributes:
        instrument_id: Broker identifier of the instrument (FIGI).
        ticker: Exchange ticker.
        name: Human readable instrument name.
        quantity: Number of units held.
        average_price: Average buy price, as reported by the broker.
        current_price: Last known instrument price.
        income: Income of the current value against the cost basis.
        dividends_and_coupons: Accrued dividend and coupon payments.
        taxes: Taxes withheld from those payments.
        fees: Fees charged for the instrument.
    """

    instrument_id: str
    ticker: str
    name: str
    quantity: Decimal
    average_price: Money
    current_price: Money
    income: Income
    dividends_and_coupons: Money | None = None
    taxes: Money | None = None
    fees: Money | None = None

    def __post_init__(self) -> None:
        currency = self.current_price.currency
        for money in (self.average_price, self.income.absolute):
            if money.currency != currency:
                raise CurrencyMismatchError(money.currency, currency)
        for field_name in ("dividends_and_coupons", "taxes", "fees"):
            if getattr(self, field_name) is None:
                object.__setattr__(self, field_name, Money.zero(currency))

    @property
    def currency(self) -> str:
        return self.current_price.currency

    @property
    def cost_basis(self) -> Money:
        """Amount originally paid: average price times quantity."""
        return self.average_price.multiply(self.quantity)

    @property
    def current_value(self) -> Money:
        """Market value: current price times quantity."""
        return self.current_price.multiply(self.quantity)

    @property
    def net_payments(self) -> Money:
        return self.dividends_and_coupons + self.taxes


__all__ = ["OperationTotals", "Paper"]
