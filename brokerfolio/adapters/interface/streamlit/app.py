"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from decimal import Decimal

import streamlit as st
import altair as alt

from brokerfolio.domain.models import Asset, Portfolio
from brokerfolio.domain.services import aggregate_total_income, total_income
from brokerfolio.infrastructure.container import (
    build_client,
    build_portfolio_use_case,
)
from brokerfolio.infrastructure.settings import InvestSettings

CURRENCY_OPTIONS = ["RUB", "USD", "EUR"]


def _fetch_portfolio(reporting_currency: str, with_history: bool) -> Portfolio:
    """Fetch the portfolio snapshot from the broker API."""
    settings = InvestSettings.from_env()
    with build_client(settings) as client:
        use_case = build_portfolio_use_case(client=client, settings=settings)
        return use_case.execute(
            reporting_currency=reporting_currency,
            with_operations=with_history,
        )


@st.cache_data(show_spinner=False, ttl=300)
def _load_portfolio(reporting_currency: str, with_history: bool) -> Portfolio:
    """Cached wrapper around _fetch_portfolio for Streamlit sessions."""
    return _fetch_portfolio(reporting_currency, with_history)


def _prepare_donut_chart_data(
    portfolio: Portfolio,
    locale: str,
) -> list[dict[str, str | float]]:
    """Prepare donut chart rows of category values.

    Categories with no positive value are left out; their share of the
    portfolio is computed against the asset total only, cash excluded.
    """
    assets = [
        asset
        for asset in portfolio.assets.values()
        if asset.total_value.amount > 0
    ]
    total = sum(
        (asset.total_value.amount for asset in assets),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for asset in assets:
        share = (
            asset.total_value.amount / total * Decimal("100")
            if total
            else Decimal("0")
        )
        data.append(
            {
                "category": asset.name,
                "amount": float(asset.total_value.amount),
                "amount_label": asset.total_value.format(locale),
                "share_label": f"{share:.1f}%",
            }
        )
    return data


def _render_category_chart(
    portfolio: Portfolio,
    locale: str,
    chart_size: int = 360,
    palette: Sequence[str] | None = None,
) -> None:
    """Render a donut chart of portfolio value by category."""
    data = _prepare_donut_chart_data(portfolio, locale)
    if not data:
        st.info("No positions available for the chart.")
        return
    palette_scale = list(
        palette
        or ["#1b9aaa", "#2e7d32", "#f4a261", "#e76f51", "#457b9d"]
    )
    chart = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=palette_scale),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    ).properties(
        width=chart_size,
        height=chart_size,
    )
    st.subheader("Value by category")
    st.altair_chart(chart, width="stretch")


def _paper_rows(asset: Asset, locale: str) -> list[dict[str, str]]:
    return [
        {
            "Ticker": paper.ticker,
            "Name": paper.name,
            "Quantity": f"{paper.quantity.normalize():f}",
            "Avg price": paper.average_price.format(locale),
            "Price": paper.current_price.format(locale),
            "Value": paper.current_value.format(locale),
            "Income": paper.income.format(locale),
            "Total income": total_income(paper).format(locale),
            "Dividends": paper.net_payments.format(locale),
        }
        for paper in asset.papers
    ]


def _render_assets(portfolio: Portfolio, locale: str) -> None:
    for asset in portfolio.assets.values():
        st.subheader(asset.name)
        st.caption(
            f"Total {asset.total_value.format(locale)}, "
            f"income {asset.total_income.format(locale)}, "
            f"total income {aggregate_total_income(asset).format(locale)}"
        )
        st.dataframe(_paper_rows(asset, locale), width="stretch", hide_index=True)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Brokerfolio", layout="wide")
    st.title("Brokerfolio")

    settings = InvestSettings.from_env()
    options = list(dict.fromkeys([settings.reporting_currency, *CURRENCY_OPTIONS]))
    currency = st.sidebar.selectbox("Reporting currency", options)
    with_history = st.sidebar.checkbox("Include dividends and fees", value=True)

    try:
        portfolio = _load_portfolio(currency, with_history)
    except RuntimeError as exc:
        st.error(str(exc))
        return

    locale = settings.locale
    value_col, invested_col, income_col, total_col = st.columns(4)
    value_col.metric("Value", portfolio.total_value.format(locale))
    invested_col.metric("Invested", portfolio.cost_basis.format(locale))
    income_col.metric(
        "Income",
        portfolio.total_income.absolute.format(locale),
        f"{portfolio.total_income.rounded_percent()}%",
    )
    overall = aggregate_total_income(portfolio)
    total_col.metric(
        "Total income",
        overall.absolute.format(locale),
        f"{overall.rounded_percent()}%",
    )
    for warning in portfolio.warnings:
        st.warning(warning.message)

    _render_category_chart(portfolio, locale)
    if not portfolio.assets:
        st.warning("No positions found for this account.")
        return
    _render_assets(portfolio, locale)


if __name__ == "__main__":  # pragma: no cover
    main()
