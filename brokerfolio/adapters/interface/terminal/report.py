"""Rich rendering of portfolio snapshots and operation ledgers."""

from collections.abc import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from brokerfolio.application.use_cases.build_history import HistoryReport
from brokerfolio.domain.constants import DEFAULT_LOCALE
from brokerfolio.domain.models import (
    Asset,
    ConversionWarning,
    Income,
    Money,
    Paper,
    Portfolio,
)
from brokerfolio.domain.services import aggregate_total_income, total_income


def income_text(income: Income, locale: str = DEFAULT_LOCALE) -> Text:
    """Return income coloured green when positive and red when negative."""
    if income.is_negative():
        style = "red"
    elif income.is_zero():
        style = ""
    else:
        style = "green"
    return Text(income.format(locale), style=style)


def money_text(money: Money, locale: str = DEFAULT_LOCALE) -> Text:
    style = "red" if money.is_negative() else ""
    return Text(money.format(locale), style=style)


def papers_table(
    title: str,
    papers: Iterable[Paper],
    locale: str = DEFAULT_LOCALE,
) -> Table:
    """Build the per-paper table of one category.

    Args:
        title: Table title, usually the category label.
        papers: Papers to list, in display order.
        locale: Locale used when formatting money.

    Returns:
        Table: Renderable table.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Ticker", style="bold")
    table.add_column("Name", style="dim")
    table.add_column("Quantity", justify="right")
    table.add_column("Avg price", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Income", justify="right")
    table.add_column("Total income", justify="right")
    table.add_column("Dividends", justify="right")
    table.add_column("Fees", justify="right")
    for paper in papers:
        table.add_row(
            paper.ticker,
            paper.name,
            f"{paper.quantity.normalize():f}",
            paper.average_price.format(locale),
            paper.current_price.format(locale),
            paper.current_value.format(locale),
            income_text(paper.income, locale),
            income_text(total_income(paper), locale),
            money_text(paper.net_payments, locale),
            money_text(paper.fees, locale),
        )
    return table


def asset_table(
    asset: Asset,
    aggregate: bool = False,
    locale: str = DEFAULT_LOCALE,
) -> Table:
    """Build the table of one asset, with a totals caption."""
    table = papers_table(asset.name, asset.detail(aggregate), locale)
    caption = (
        f"Total {asset.total_value.format(locale)}, "
        f"income {asset.total_income.format(locale)}, "
        f"total income {aggregate_total_income(asset).format(locale)}"
    )
    if set(asset.value_by_currency) - {asset.currency}:
        by_currency = ", ".join(
            money.format(locale) for money in asset.value_by_currency.values()
        )
        caption += f"\nBy currency: {by_currency}"
    table.caption = caption
    return table


def totals_panel(portfolio: Portfolio, locale: str = DEFAULT_LOCALE) -> Panel:
    lines = Text()
    lines.append(f"Value:        {portfolio.total_value.format(locale)}\n")
    lines.append(f"Invested:     {portfolio.cost_basis.format(locale)}\n")
    lines.append("Income:       ")
    lines.append_text(income_text(portfolio.total_income, locale))
    lines.append("\nTotal income: ")
    lines.append_text(income_text(aggregate_total_income(portfolio), locale))
    lines.append(f"\nDividends:    {portfolio.dividends.format(locale)}")
    lines.append(f"\nFees:         {portfolio.fees.format(locale)}")
    if portfolio.cash_balances:
        cash = ", ".join(m.format(locale) for m in portfolio.cash_balances)
        lines.append(f"\nCash:         {cash}")
    return Panel.fit(lines, title=f"Portfolio ({portfolio.reporting_currency})")


def render_warnings(
    console: Console,
    warnings: Iterable[ConversionWarning],
) -> None:
    for warning in warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning.message}")


def render_portfolio(
    console: Console,
    portfolio: Portfolio,
    aggregate: bool = False,
    locale: str = DEFAULT_LOCALE,
) -> None:
    """Print every asset table, the totals panel and then the warnings."""
    if not portfolio.assets and not portfolio.cash_balances:
        console.print("[dim]No positions to show.[/dim]")
    for asset in portfolio.assets.values():
        console.print(asset_table(asset, aggregate, locale))
    console.print(totals_panel(portfolio, locale))
    render_warnings(console, portfolio.warnings)


def history_table(report: HistoryReport, locale: str = DEFAULT_LOCALE) -> Table:
    """Build the ledger table of one instrument."""
    instrument = report.instrument
    table = Table(
        title=f"{instrument.ticker} {instrument.name}".strip(),
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date")
    table.add_column("Kind")
    table.add_column("Quantity", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Payment", justify="right")
    table.add_column("Running total", justify="right")
    table.add_column("State", style="dim")
    for entry in report.ledger.entries:
        record = entry.record
        table.add_row(
            record.timestamp.strftime("%Y-%m-%d %H:%M"),
            record.kind.value,
            f"{record.quantity.normalize():f}",
            record.price.format(locale),
            money_text(record.payment, locale),
            money_text(entry.running_total, locale),
            record.state,
        )
    table.caption = f"Total {report.ledger.running_total.format(locale)}"
    return table


def kind_totals_table(
    report: HistoryReport,
    locale: str = DEFAULT_LOCALE,
) -> Table:
    """Build the payment totals of each operation kind."""
    table = Table(
        title="Totals by kind",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Kind")
    table.add_column("Payment", justify="right")
    for kind, total in report.ledger.totals_by_kind().items():
        table.add_row(kind.value, money_text(total, locale))
    return table


def render_history(
    console: Console,
    report: HistoryReport,
    locale: str = DEFAULT_LOCALE,
) -> None:
    if report.ledger.is_empty():
        console.print(
            f"[dim]No operations for {report.instrument.ticker}.[/dim]"
        )
        return
    console.print(history_table(report, locale))
    console.print(kind_totals_table(report, locale))


__all__ = [
    "income_text",
    "money_text",
    "papers_table",
    "asset_table",
    "totals_panel",
    "render_warnings",
    "render_portfolio",
    "history_table",
    "kind_totals_table",
    "render_history",
]
