"""Tests for the portfolio use case."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from brokerfolio.application.use_cases.build_portfolio import (
    BuildPortfolioUseCase,
)
from brokerfolio.domain.errors import ApiError, RateUnavailableError
from brokerfolio.domain.models import (
    Category,
    Money,
    RawOperation,
    RawPosition,
)


def _position(ticker, category, current, currency="RUB") -> RawPosition:
    return RawPosition(
        instrument_id=f"FIGI_{ticker}",
        ticker=ticker,
        name=ticker,
        category=category,
        quantity=Decimal("10"),
        average_price=Money.of(current, currency),
        current_price=Money.of(current, currency),
    )


class _FakeBroker:
    def __init__(self, positions, cash=(), rates=None, operations=None):
        self.positions = positions
        self.cash = list(cash)
        self.rates = rates or {}
        self.operations = operations or {}
        self.position_calls: list[Category] = []
        self.cash_calls = 0

    def fetch_positions(self, category):
        self.position_calls.append(category)
        return self.positions.get(category, [])

    def fetch_cash_balances(self):
        self.cash_calls += 1
        return self.cash

    def fetch_rate(self, from_currency, to_currency):
        try:
            return self.rates[from_currency]
        except KeyError:
            raise RateUnavailableError(from_currency, to_currency) from None

    def fetch_operations(self, instrument_id):
        return self.operations.get(instrument_id, [])


def _use_case(broker, logger=None) -> BuildPortfolioUseCase:
    return BuildPortfolioUseCase(
        position_source=broker,
        cash_source=broker,
        rate_source=broker,
        operation_source=broker,
        logger=logger or MagicMock(),
        max_workers=2,
    )


def test_execute_builds_every_category_with_cash() -> None:
    """All categories are fetched and cash is added to the totals."""
    broker = _FakeBroker(
        {
            Category.SHARE: [_position("SBER", Category.SHARE, "100")],
            Category.ETF: [_position("FXUS", Category.ETF, "5")],
        },
        cash=[Money.of(1000, "RUB")],
    )

    portfolio = _use_case(broker).execute()

    assert set(broker.position_calls) == set(Category)
    assert broker.cash_calls == 1
    assert list(portfolio.assets) == [Category.ETF, Category.SHARE]
    assert portfolio.total_value == Money.of(1000 + 50 + 1000, "RUB")
    assert portfolio.warnings == ()


def test_execute_skips_cash_when_currencies_are_selected() -> None:
    """Cash is reported as currency positions, so it is not added twice."""
    broker = _FakeBroker(
        {Category.CURRENCY: [_position("USDRUB", Category.CURRENCY, "90")]},
        cash=[Money.of(1000, "RUB")],
    )

    portfolio = _use_case(broker).execute(categories=[Category.CURRENCY])

    assert broker.cash_calls == 0
    assert broker.position_calls == [Category.CURRENCY]
    assert portfolio.cash_balances == ()


def test_execute_converts_foreign_values_and_warns_on_missing_rate() -> None:
    """Missing rates exclude values from totals without failing."""
    logger = MagicMock()
    broker = _FakeBroker(
        {
            Category.SHARE: [
                _position("AAPL", Category.SHARE, "150", currency="USD"),
                _position("BABA", Category.SHARE, "10", currency="HKD"),
            ]
        },
        rates={"USD": Decimal("90")},
    )

    portfolio = _use_case(broker, logger).execute(
        categories=[Category.SHARE],
        reporting_currency="rub",
    )

    assert portfolio.reporting_currency == "RUB"
    assert portfolio.total_value == Money.of(1500 * 90, "RUB")
    assert [w.subject for w in portfolio.warnings] == ["BABA"]
    assert len(portfolio.asset(Category.SHARE).papers) == 2
    logger.warning.assert_called()


def test_execute_adds_operation_totals_and_reports_progress() -> None:
    """Per-instrument dividends flow into the papers."""
    dividend = RawOperation(
        operation_id="1",
        instrument_id="FIGI_SBER",
        timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc),
        operation_type="OPERATION_TYPE_DIVIDEND",
        currency="RUB",
        payment=Money.of(33, "RUB"),
    )
    broker = _FakeBroker(
        {Category.SHARE: [_position("SBER", Category.SHARE, "100")]},
        operations={"FIGI_SBER": [dividend]},
    )
    progress = MagicMock()

    portfolio = _use_case(broker).execute(
        categories=[Category.SHARE],
        progress=progress,
    )

    paper = portfolio.asset(Category.SHARE).papers[0]
    assert paper.dividends_and_coupons == Money.of(33, "RUB")
    assert portfolio.dividends == Money.of(33, "RUB")
    progress.start.assert_called_once_with(1)
    progress.advance.assert_called_once_with("SBER")
    progress.finish.assert_called_once()


def test_execute_without_operations_skips_history() -> None:
    """with_operations=False should not request operations."""
    broker = _FakeBroker(
        {Category.SHARE: [_position("SBER", Category.SHARE, "100")]}
    )
    broker.fetch_operations = MagicMock(return_value=[])

    _use_case(broker).execute(
        categories=[Category.SHARE],
        with_operations=False,
    )

    broker.fetch_operations.assert_not_called()


def test_execute_propagates_api_errors() -> None:
    """A failed position fetch aborts the snapshot."""
    broker = _FakeBroker({})
    broker.fetch_positions = MagicMock(side_effect=ApiError("boom"))

    with pytest.raises(ApiError):
        _use_case(broker).execute(categories=[Category.BOND])
