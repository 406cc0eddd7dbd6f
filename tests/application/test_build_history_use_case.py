"""Tests for the history use case."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from brokerfolio.application.use_cases.build_history import BuildHistoryUseCase
from brokerfolio.domain.errors import EmptyHistoryError, InstrumentNotFoundError
from brokerfolio.domain.models import (
    Category,
    InstrumentInfo,
    Money,
    OperationKind,
    RawOperation,
)


def _operation(op_id: str, day: int, payment: str, op_type: str) -> RawOperation:
    return RawOperation(
        operation_id=op_id,
        instrument_id="BBG004730N88",
        timestamp=datetime(2024, 3, day, tzinfo=timezone.utc),
        operation_type=op_type,
        currency="RUB",
        payment=Money.of(payment, "RUB"),
    )


def _lookup(*instruments: InstrumentInfo) -> MagicMock:
    lookup = MagicMock()
    lookup.find_instruments.return_value = list(instruments)
    return lookup


SBER = InstrumentInfo("BBG004730N88", "SBER", "Sberbank", Category.SHARE)
SBERP = InstrumentInfo("BBG0047315Y7", "SBERP", "Sberbank pref", Category.SHARE)


def test_execute_resolves_exact_ticker_and_builds_ledger() -> None:
    """The exact ticker match wins and operations are ordered."""
    source = MagicMock()
    source.fetch_operations.return_value = [
        _operation("2", 5, "120", "OPERATION_TYPE_DIVIDEND"),
        _operation("1", 1, "-2500", "OPERATION_TYPE_BUY"),
    ]
    use_case = BuildHistoryUseCase(_lookup(SBERP, SBER), source, logger=MagicMock())

    report = use_case.execute(" sber ")

    assert report.instrument is SBER
    source.fetch_operations.assert_called_once_with("BBG004730N88")
    kinds = [entry.record.kind for entry in report.ledger.entries]
    assert kinds == [OperationKind.BUY, OperationKind.DIVIDEND]
    assert report.ledger.running_total == Money.of(-2380, "RUB")


def test_execute_falls_back_to_first_candidate() -> None:
    """Without an exact match the first candidate is used with a warning."""
    logger = MagicMock()
    source = MagicMock()
    source.fetch_operations.return_value = []
    use_case = BuildHistoryUseCase(_lookup(SBERP), source, logger=logger)

    report = use_case.execute("SBE")

    assert report.instrument is SBERP
    assert report.ledger.is_empty()
    logger.warning.assert_called_once()


def test_execute_unknown_ticker_raises() -> None:
    """No candidates means the ticker cannot be resolved."""
    use_case = BuildHistoryUseCase(_lookup(), MagicMock(), logger=MagicMock())

    with pytest.raises(InstrumentNotFoundError):
        use_case.execute("NOPE")
    with pytest.raises(InstrumentNotFoundError):
        use_case.execute("  ")


def test_execute_requires_history_when_asked() -> None:
    """require_non_empty turns an empty history into an error."""
    source = MagicMock()
    source.fetch_operations.return_value = []
    use_case = BuildHistoryUseCase(_lookup(SBER), source, logger=MagicMock())

    with pytest.raises(EmptyHistoryError):
        use_case.execute("SBER", require_non_empty=True)
