"""Composition root for wiring infrastructure adapters."""

from brokerfolio.application.use_cases.build_history import BuildHistoryUseCase
from brokerfolio.application.use_cases.build_portfolio import (
    BuildPortfolioUseCase,
)
from brokerfolio.infrastructure.logging.logger import get_app_logger
from brokerfolio.infrastructure.settings import InvestSettings
from brokerfolio.infrastructure.tinkoff_client import TinkoffInvestClient


def build_client(
    settings: InvestSettings | None = None,
) -> TinkoffInvestClient:
    """Return the broker API client.

    Raises:
        RuntimeError: If the API token is not configured.
    """
    resolved = settings or InvestSettings.from_env()
    return TinkoffInvestClient.from_settings(resolved, logger=get_app_logger())


def build_portfolio_use_case(
    client: TinkoffInvestClient | None = None,
    settings: InvestSettings | None = None,
) -> BuildPortfolioUseCase:
    """Return the portfolio use case wired to the broker client."""
    resolved = settings or InvestSettings.from_env()
    source = client or build_client(resolved)
    return BuildPortfolioUseCase(
        position_source=source,
        cash_source=source,
        rate_source=source,
        operation_source=source,
        logger=get_app_logger(),
        max_workers=resolved.fetch_workers,
    )


def build_history_use_case(
    client: TinkoffInvestClient | None = None,
    settings: InvestSettings | None = None,
) -> BuildHistoryUseCase:
    """Return the history use case wired to the broker client."""
    source = client or build_client(settings)
    return BuildHistoryUseCase(
        instrument_lookup=source,
        operation_source=source,
        logger=get_app_logger(),
    )


__all__ = [
    "build_client",
    "build_portfolio_use_case",
    "build_history_use_case",
]
