"""Use case to build a valued portfolio snapshot from the broker API."""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from brokerfolio.application.ports.operations import OperationSourcePort
from brokerfolio.application.ports.positions import (
    CashSourcePort,
    PositionSourcePort,
)
from brokerfolio.application.ports.progress import NullProgress, ProgressPort
from brokerfolio.application.ports.quotes import RateSourcePort
from brokerfolio.domain.constants import DEFAULT_REPORTING_CURRENCY
from brokerfolio.domain.errors import RateUnavailableError
from brokerfolio.domain.models import (
    DISPLAY_ORDER,
    Category,
    Money,
    OperationTotals,
    Portfolio,
    RawPosition,
)
from brokerfolio.domain.services import (
    assemble_portfolio,
    normalize_currency,
    summarize_operations,
    to_operation_record,
)
from brokerfolio.infrastructure.logging.logger import get_app_logger


class BuildPortfolioUseCase:
    """Fetch positions, cash and rates concurrently, then value them.

    Every fetch for a snapshot completes before aggregation starts. API
    errors propagate unchanged; a missing conversion rate only excludes the
    affected values from the totals.
    """

    def __init__(
        self,
        position_source: PositionSourcePort,
        cash_source: CashSourcePort,
        rate_source: RateSourcePort,
        operation_source: OperationSourcePort | None = None,
        logger=None,
        max_workers: int = 4,
    ) -> None:
        """Initialize the use case.

        Args:
            position_source: Port returning positions per category.
            cash_source: Port returning cash balances.
            rate_source: Port returning conversion rates.
            operation_source: Optional port returning instrument operations,
                used to add dividends, taxes and fees to each paper.
            logger: Optional logger compatible with logging.Logger-like API.
            max_workers: Concurrent requests during fan-out.
        """
        self._position_source = position_source
        self._cash_source = cash_source
        self._rate_source = rate_source
        self._operation_source = operation_source
        self._logger = logger or get_app_logger()
        self._max_workers = max(1, max_workers)

    def execute(
        self,
        categories: Iterable[Category] = DISPLAY_ORDER,
        reporting_currency: str = DEFAULT_REPORTING_CURRENCY,
        with_operations: bool = True,
        progress: ProgressPort | None = None,
    ) -> Portfolio:
        """Return the portfolio for the selected categories.

        Args:
            categories: Categories to include.
            reporting_currency: Currency of the cross-category totals.
            with_operations: Whether to fetch per-instrument operations.
            progress: Optional sink for per-instrument fetch progress.

        Returns:
            Portfolio: Valued snapshot.

        Raises:
            ApiError: If any position, cash or operation fetch fails.
        """
        selected = tuple(dict.fromkeys(categories))
        currency = (
            normalize_currency(reporting_currency) or DEFAULT_REPORTING_CURRENCY
        )
        # The broker reports cash as currency positions.
        include_cash = Category.CURRENCY not in selected

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            position_futures = {
                category: executor.submit(
                    self._position_source.fetch_positions,
                    category,
                )
                for category in selected
            }
            cash_future = (
                executor.submit(self._cash_source.fetch_cash_balances)
                if include_cash
                else None
            )
            positions_by_category = {
                category: list(future.result())
                for category, future in position_futures.items()
            }
            cash_balances = list(cash_future.result()) if cash_future else []

            positions = [
                position
                for category_positions in positions_by_category.values()
                for position in category_positions
            ]
            totals = (
                self._fetch_totals(executor, positions, progress)
                if with_operations and self._operation_source is not None
                else {}
            )
            rates = self._fetch_rates(
                executor,
                self._foreign_currencies(positions, cash_balances, currency),
                currency,
            )

        portfolio = assemble_portfolio(
            positions_by_category,
            cash_balances,
            currency,
            rates=rates,
            totals_by_instrument=totals,
            logger=self._logger,
        )
        self._logger.info(
            f"Portfolio built: categories={len(portfolio.assets)}, "
            f"value={portfolio.total_value.amount} {currency}, "
            f"income={portfolio.total_income.absolute.amount} {currency}, "
            f"warnings={len(portfolio.warnings)}"
        )
        return portfolio

    def _fetch_totals(
        self,
        executor: ThreadPoolExecutor,
        positions: list[RawPosition],
        progress: ProgressPort | None,
    ) -> dict[str, OperationTotals]:
        progress = progress or NullProgress()
        progress.start(len(positions))
        futures = [
            (
                position,
                executor.submit(
                    self._operation_source.fetch_operations,
                    position.instrument_id,
                ),
            )
            for position in positions
        ]
        totals: dict[str, OperationTotals] = {}
        try:
            for position, future in futures:
                records = [to_operation_record(op) for op in future.result()]
                totals[position.instrument_id] = summarize_operations(
                    records,
                    position.currency,
                    self._logger,
                )
                progress.advance(position.ticker)
        finally:
            progress.finish()
        return totals

    def _fetch_rates(
        self,
        executor: ThreadPoolExecutor,
        currencies: list[str],
        target_currency: str,
    ) -> dict[str, Decimal]:
        futures = {
            source: executor.submit(
                self._rate_source.fetch_rate,
                source,
                target_currency,
            )
            for source in currencies
        }
        rates: dict[str, Decimal] = {}
        for source, future in futures.items():
            try:
                rates[source] = future.result()
            except RateUnavailableError as exc:
                self._logger.warning(str(exc))
        return rates

    @staticmethod
    def _foreign_currencies(
        positions: list[RawPosition],
        cash_balances: list[Money],
        target_currency: str,
    ) -> list[str]:
        currencies = [p.currency for p in positions]
        currencies.extend(balance.currency for balance in cash_balances)
        return [
            currency
            for currency in dict.fromkeys(currencies)
            if currency != target_currency
        ]


__all__ = ["BuildPortfolioUseCase"]
