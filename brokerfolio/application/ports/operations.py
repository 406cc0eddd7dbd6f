"""Ports for instrument lookup and operation history."""

from typing import Protocol

from brokerfolio.domain.models import InstrumentInfo, RawOperation


class OperationSourcePort(Protocol):
    """Port exposing executed operations of an instrument."""

    def fetch_operations(self, instrument_id: str) -> list[RawOperation]:
        """Return the instrument's executed operations.

        Raises:
            ApiError: If the request fails.
        """


class InstrumentLookupPort(Protocol):
    """Port resolving tickers to instruments."""

    def find_instruments(self, ticker: str) -> list[InstrumentInfo]:
        """Return instruments matching the ticker query.

        Raises:
            ApiError: If the request fails.
        """


__all__ = ["OperationSourcePort", "InstrumentLookupPort"]
