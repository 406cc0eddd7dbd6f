"""Tests for the composition root."""

from unittest.mock import MagicMock

import pytest

from brokerfolio.application.use_cases.build_history import BuildHistoryUseCase
from brokerfolio.application.use_cases.build_portfolio import (
    BuildPortfolioUseCase,
)
from brokerfolio.infrastructure import container
from brokerfolio.infrastructure.settings import InvestSettings
from brokerfolio.infrastructure.tinkoff_client import TinkoffInvestClient


@pytest.fixture(autouse=True)
def _quiet_logger(monkeypatch):
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())


def test_build_client_uses_settings() -> None:
    """The client is configured from settings."""
    client = container.build_client(InvestSettings(token="t.secret"))

    assert isinstance(client, TinkoffInvestClient)
    client.close()


def test_build_client_without_token_raises() -> None:
    """A missing token is reported as a configuration error."""
    with pytest.raises(RuntimeError, match="TINKOFF_TOKEN_V2"):
        container.build_client(InvestSettings())


def test_build_portfolio_use_case_wires_one_client() -> None:
    """Every port of the portfolio use case is served by the client."""
    client = MagicMock()

    use_case = container.build_portfolio_use_case(
        client=client,
        settings=InvestSettings(fetch_workers=7),
    )

    assert isinstance(use_case, BuildPortfolioUseCase)
    assert use_case._position_source is client
    assert use_case._rate_source is client
    assert use_case._operation_source is client
    assert use_case._max_workers == 7


def test_build_history_use_case_builds_client_when_missing(monkeypatch) -> None:
    """Without a client one is built from the settings."""
    client = MagicMock()
    monkeypatch.setattr(container, "build_client", lambda settings: client)

    use_case = container.build_history_use_case(settings=InvestSettings())

    assert isinstance(use_case, BuildHistoryUseCase)
    assert use_case._instrument_lookup is client
    assert use_case._operation_source is client
