"""Tests for the Streamlit dashboard."""

from decimal import Decimal
from unittest.mock import MagicMock

from brokerfolio.adapters.interface.streamlit import app
from brokerfolio.domain.models import (
    Category,
    Money,
    OperationTotals,
    RawPosition,
)
from brokerfolio.domain.services import assemble_portfolio
from brokerfolio.infrastructure.settings import InvestSettings


def _portfolio(with_foreign_cash: bool = True, totals_by_instrument=None):
    positions = {
        Category.SHARE: [
            RawPosition(
                instrument_id="BBG004730N88",
                ticker="SBER",
                name="Sberbank",
                category=Category.SHARE,
                quantity=Decimal("10"),
                average_price=Money.of(250, "RUB"),
                current_price=Money.of(300, "RUB"),
            )
        ],
        Category.BOND: [
            RawPosition(
                instrument_id="RU000A0JX0J2",
                ticker="OFZ",
                name="OFZ 26212",
                category=Category.BOND,
                quantity=Decimal("1"),
                average_price=Money.of(1000, "RUB"),
                current_price=Money.of(1000, "RUB"),
            )
        ],
    }
    cash = [Money.of(5, "USD")] if with_foreign_cash else []
    return assemble_portfolio(
        positions,
        cash,
        "RUB",
        totals_by_instrument=totals_by_instrument,
        logger=MagicMock(),
    )


class _FakeColumn:
    def __init__(self, sink):
        self.sink = sink

    def metric(self, label, value, delta=None, **kwargs):
        self.sink.append((label, value, delta))


class _FakeSidebar:
    def selectbox(self, label, options):
        return options[0]

    def checkbox(self, label, value=False):
        return value


class _FakeStreamlit:
    def __init__(self) -> None:
        self.metrics: list[tuple] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.subheaders: list[str] = []
        self.captions: list[str] = []
        self.frames: list = []
        self.charts: list = []
        self.sidebar = _FakeSidebar()

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text):
        self.title_text = text

    def columns(self, count):
        return [_FakeColumn(self.metrics) for _ in range(count)]

    def warning(self, text):
        self.warnings.append(text)

    def error(self, text):
        self.errors.append(text)

    def info(self, text):
        self.warnings.append(text)

    def subheader(self, text):
        self.subheaders.append(text)

    def caption(self, text):
        self.captions.append(text)

    def dataframe(self, data, **kwargs):
        self.frames.append(data)

    def altair_chart(self, chart, **kwargs):
        self.charts.append(chart)


def test_fetch_portfolio_closes_client(monkeypatch):
    """_fetch_portfolio runs the use case and closes the client."""
    client = MagicMock()
    client.__enter__.return_value = client
    use_case = MagicMock()
    use_case.execute.return_value = "portfolio"
    monkeypatch.setattr(
        app.InvestSettings,
        "from_env",
        classmethod(lambda cls: InvestSettings(token="t")),
    )
    monkeypatch.setattr(app, "build_client", lambda settings: client)
    monkeypatch.setattr(
        app,
        "build_portfolio_use_case",
        lambda client, settings: use_case,
    )

    result = app._fetch_portfolio("USD", False)

    assert result == "portfolio"
    use_case.execute.assert_called_once_with(
        reporting_currency="USD",
        with_operations=False,
    )
    client.__exit__.assert_called_once()


def test_prepare_donut_chart_data_shares():
    """Chart rows carry category values and their share."""
    data = app._prepare_donut_chart_data(_portfolio(), "en_US")

    assert [row["category"] for row in data] == ["Bonds", "Shares"]
    assert data[0]["amount"] == 1000.0
    assert data[0]["share_label"] == "25.0%"
    assert data[1]["amount_label"] == "3,000.00 ₽"


def test_main_renders_metrics_chart_tables_and_warnings(monkeypatch):
    """main should render the full dashboard."""
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app.InvestSettings,
        "from_env",
        classmethod(lambda cls: InvestSettings()),
    )
    monkeypatch.setattr(
        app,
        "_load_portfolio",
        lambda currency, with_history: _portfolio(),
    )

    app.main()

    labels = [metric[0] for metric in fake_st.metrics]
    assert labels == ["Value", "Invested", "Income", "Total income"]
    assert fake_st.metrics[2][1:] == ("500.00 ₽", "14.29%")
    assert fake_st.metrics[3][1:] == ("500.00 ₽", "14.29%")
    assert len(fake_st.charts) == 1
    assert fake_st.subheaders == ["Value by category", "Bonds", "Shares"]
    assert fake_st.frames[1][0]["Ticker"] == "SBER"
    assert any("USD->RUB" in text for text in fake_st.warnings)


def test_main_shows_configuration_errors(monkeypatch):
    """A missing token is displayed instead of raising."""
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app.InvestSettings,
        "from_env",
        classmethod(lambda cls: InvestSettings()),
    )

    def _fail(currency, with_history):
        raise RuntimeError("Missing environment variable: TINKOFF_TOKEN_V2")

    monkeypatch.setattr(app, "_load_portfolio", _fail)

    app.main()

    assert fake_st.errors == ["Missing environment variable: TINKOFF_TOKEN_V2"]
    assert fake_st.metrics == []


def test_main_adds_dividends_to_total_income(monkeypatch):
    """Total income counts net dividends in metrics, captions and rows."""
    totals = {
        "BBG004730N88": OperationTotals(
            dividends_and_coupons=Money.of(100, "RUB"),
            taxes=Money.of(-13, "RUB"),
            fees=Money.zero("RUB"),
        )
    }
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app.InvestSettings,
        "from_env",
        classmethod(lambda cls: InvestSettings()),
    )
    monkeypatch.setattr(
        app,
        "_load_portfolio",
        lambda currency, with_history: _portfolio(totals_by_instrument=totals),
    )

    app.main()

    assert fake_st.metrics[3] == ("Total income", "587.00 ₽", "16.77%")
    assert fake_st.captions[1].endswith("total income 587.00 ₽ (23.48%)")
    assert fake_st.frames[1][0]["Total income"] == "587.00 ₽ (23.48%)"
