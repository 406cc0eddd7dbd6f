"""Domain exceptions raised by the valuation engine and its collaborators."""


class BrokerfolioError(Exception):
    """Base class for errors surfaced to the command line."""


class CurrencyMismatchError(BrokerfolioError, ValueError):
    """Raised when arithmetic mixes money values in different currencies."""

    def __init__(self, left: str, right: str) -> None:
        super().__init__(
            f"Cannot operate on different currencies: {left} and {right}"
        )
        self.left = left
        self.right = right


class RateUnavailableError(BrokerfolioError, LookupError):
    """Raised when no conversion rate exists for a currency pair."""

    def __init__(self, from_currency: str, to_currency: str) -> None:
        super().__init__(
            f"No conversion rate from {from_currency} to {to_currency}"
        )
        self.from_currency = from_currency
        self.to_currency = to_currency


class ApiError(BrokerfolioError, RuntimeError):
    """Raised when a remote API request fails."""


class EmptyHistoryError(BrokerfolioError, ValueError):
    """Raised when a non-empty operation history was required."""


class MixedInstrumentsError(BrokerfolioError, ValueError):
    """Raised when a ledger is built from several instruments' records."""

    def __init__(self, instrument_ids) -> None:
        super().__init__(
            "Ledger records belong to several instruments: "
            f"{', '.join(sorted(instrument_ids))}"
        )
        self.instrument_ids = tuple(sorted(instrument_ids))


class InstrumentNotFoundError(BrokerfolioError, LookupError):
    """Raised when a ticker does not resolve to any instrument."""

    def __init__(self, ticker: str) -> None:
        super().__init__(f"No instrument found for ticker {ticker}")
        self.ticker = ticker


__all__ = [
    "BrokerfolioError",
    "CurrencyMismatchError",
    "RateUnavailableError",
    "ApiError",
    "EmptyHistoryError",
    "MixedInstrumentsError",
    "InstrumentNotFoundError",
]
