"""CLI adapter printing portfolio reports and instrument histories.

Subcommands select the categories to show (``a`` for every category) or,
with ``hi <ticker>``, the operation history of one instrument.
"""

import argparse
import sys

from rich.console import Console

from brokerfolio.adapters.interface.terminal.progress import RichProgress
from brokerfolio.adapters.interface.terminal.report import (
    render_history,
    render_portfolio,
)
from brokerfolio.domain.errors import BrokerfolioError
from brokerfolio.domain.models import DISPLAY_ORDER, Category
from brokerfolio.infrastructure.container import (
    build_client,
    build_history_use_case,
    build_portfolio_use_case,
)
from brokerfolio.infrastructure.logging.logger import get_app_logger
from brokerfolio.infrastructure.settings import InvestSettings

CATEGORY_COMMANDS = {
    "a": ("All categories", DISPLAY_ORDER),
    "s": ("Shares", (Category.SHARE,)),
    "b": ("Bonds", (Category.BOND,)),
    "e": ("ETFs", (Category.ETF,)),
    "c": ("Currencies", (Category.CURRENCY,)),
    "f": ("Futures", (Category.FUTURE,)),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brokerfolio",
        description="Brokerage portfolio and operation history report",
    )
    parser.add_argument(
        "--aggregate",
        action="store_true",
        help="Show one total row per category instead of every paper",
    )
    parser.add_argument(
        "--currency",
        default=None,
        help="Reporting currency of the totals (default REPORTING_CURRENCY)",
    )
    parser.add_argument(
        "--no-history",
        dest="with_history",
        action="store_false",
        help="Skip per-instrument operations (dividends, taxes, fees)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    for command, (title, _) in CATEGORY_COMMANDS.items():
        subparsers.add_parser(command, help=title)
    history = subparsers.add_parser("hi", help="Operation history of a ticker")
    history.add_argument("ticker", help="Exchange ticker, e.g. SBER")
    return parser


def _run_portfolio(args, settings: InvestSettings, client, console) -> None:
    use_case = build_portfolio_use_case(client=client, settings=settings)
    portfolio = use_case.execute(
        categories=CATEGORY_COMMANDS[args.command][1],
        reporting_currency=args.currency or settings.reporting_currency,
        with_operations=args.with_history,
        progress=RichProgress(console=console),
    )
    render_portfolio(
        console,
        portfolio,
        aggregate=args.aggregate,
        locale=settings.locale,
    )


def _run_history(args, settings: InvestSettings, client, console) -> None:
    use_case = build_history_use_case(client=client, settings=settings)
    report = use_case.execute(
        args.ticker,
        require_non_empty=True,
        currency=args.currency or settings.reporting_currency,
    )
    render_history(console, report, locale=settings.locale)


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the process exit status.

    Args:
        argv: Arguments without the program name; ``sys.argv`` when None.

    Returns:
        int: 0 on success, 1 when the report could not be built.
    """
    args = build_parser().parse_args(argv)
    logger = get_app_logger()
    console = Console()
    errors = Console(stderr=True)
    settings = InvestSettings.from_env()

    try:
        client = build_client(settings)
    except RuntimeError as exc:
        logger.error(str(exc))
        errors.print(f"[red]Error:[/red] {exc}")
        return 1

    try:
        if args.command == "hi":
            _run_history(args, settings, client, console)
        else:
            _run_portfolio(args, settings, client, console)
    except BrokerfolioError as exc:
        logger.error(f"Command {args.command} failed: {exc}")
        errors.print(f"[red]Error:[/red] {exc}")
        return 1
    finally:
        client.close()
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
