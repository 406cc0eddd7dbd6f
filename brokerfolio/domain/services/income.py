"""Domain services for income derivation."""

from decimal import Decimal

from brokerfolio.domain.constants import HUNDRED
from brokerfolio.domain.models import Income, Money, Paper


def derive_income(current: Money, cost_basis: Money) -> Income:
    """Derive profit or loss and yield from a value and its cost basis.

    Args:
        current: Current value of the holding.
        cost_basis: Amount originally paid, in the same currency.

    Returns:
        Income: Absolute income and its percentage of the cost basis; the
        percentage is zero when the cost basis is zero.

    Raises:
        CurrencyMismatchError: If the currencies differ.
    """
    absolute = current - cost_basis
    if cost_basis.is_zero():
        percent = Decimal("0")
    else:
        percent = (absolute.amount / cost_basis.amount) * HUNDRED
    return Income(absolute=absolute, percent=percent)


def total_income(paper: Paper) -> Income:
    """Income of a paper including net dividends and coupons."""
    return derive_income(
        paper.current_value + paper.net_payments,
        paper.cost_basis,
    )


def aggregate_total_income(holding) -> Income:
    """Income of an asset or portfolio including net dividends and coupons.

    Args:
        holding: Asset or Portfolio with converted totals.

    Returns:
        Income: Total value plus dividends against the cost basis.
    """
    return derive_income(
        holding.total_value + holding.dividends,
        holding.cost_basis,
    )


__all__ = ["derive_income", "total_income", "aggregate_total_income"]
