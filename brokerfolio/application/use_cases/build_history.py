"""Use case to build the operation ledger of an instrument by ticker."""

from dataclasses import dataclass

from brokerfolio.application.ports.operations import (
    InstrumentLookupPort,
    OperationSourcePort,
)
from brokerfolio.domain.constants import DEFAULT_REPORTING_CURRENCY
from brokerfolio.domain.errors import InstrumentNotFoundError
from brokerfolio.domain.models import HistoryLedger, InstrumentInfo
from brokerfolio.domain.services import (
    build_ledger,
    normalize_ticker,
    to_operation_record,
)
from brokerfolio.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class HistoryReport:
    """Ledger of an instrument together with its identity.

    Attributes:
        instrument: Instrument the ticker resolved to.
        ledger: Ordered operations with running totals.
    """

    instrument: InstrumentInfo
    ledger: HistoryLedger


class BuildHistoryUseCase:
    """Resolve a ticker and build its operation ledger."""

    def __init__(
        self,
        instrument_lookup: InstrumentLookupPort,
        operation_source: OperationSourcePort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            instrument_lookup: Port resolving tickers to instruments.
            operation_source: Port returning instrument operations.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._instrument_lookup = instrument_lookup
        self._operation_source = operation_source
        self._logger = logger or get_app_logger()

    def execute(
        self,
        ticker: str,
        require_non_empty: bool = False,
        currency: str = DEFAULT_REPORTING_CURRENCY,
    ) -> HistoryReport:
        """Return the ledger for the instrument behind ``ticker``.

        Args:
            ticker: Ticker typed by the user.
            require_non_empty: Fail when the instrument has no operations.
            currency: Currency of an empty ledger's zero total.

        Returns:
            HistoryReport: Instrument and its ledger.

        Raises:
            InstrumentNotFoundError: If the ticker matches no instrument.
            EmptyHistoryError: If no operations exist and
                ``require_non_empty`` is set.
            ApiError: If a request fails.
        """
        instrument = self._resolve(ticker)
        operations = self._operation_source.fetch_operations(
            instrument.instrument_id
        )
        records = [to_operation_record(op) for op in operations]
        ledger = build_ledger(
            records,
            require_non_empty=require_non_empty,
            currency=currency,
        )
        self._logger.info(
            f"History built for {instrument.ticker}: "
            f"entries={len(ledger.entries)}, "
            f"total={ledger.running_total.amount} {ledger.currency}"
        )
        return HistoryReport(instrument=instrument, ledger=ledger)

    def _resolve(self, ticker: str) -> InstrumentInfo:
        wanted = normalize_ticker(ticker)
        if wanted is None:
            raise InstrumentNotFoundError(ticker)
        candidates = self._instrument_lookup.find_instruments(wanted)
        if not candidates:
            raise InstrumentNotFoundError(wanted)
        for candidate in candidates:
            if normalize_ticker(candidate.ticker) == wanted:
                return candidate
        self._logger.warning(
            f"No exact ticker match for {wanted}, "
            f"using {candidates[0].ticker}"
        )
        return candidates[0]


__all__ = ["BuildHistoryUseCase", "HistoryReport"]
