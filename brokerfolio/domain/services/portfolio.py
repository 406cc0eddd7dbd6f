"""Domain services for portfolio assembly."""

import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal
from logging import Logger

from brokerfolio.domain.constants import DEFAULT_REPORTING_CURRENCY
from brokerfolio.domain.models import (
    DISPLAY_ORDER,
    Asset,
    Category,
    ConversionWarning,
    Money,
    OperationTotals,
    Portfolio,
    RawPosition,
)
from brokerfolio.domain.services.assets import build_asset
from brokerfolio.domain.services.fx import convert_money
from brokerfolio.domain.services.income import derive_income
from brokerfolio.domain.services.normalization import normalize_currency

_LOGGER = logging.getLogger(__name__)

CASH_SUBJECT = "cash"


def assemble_portfolio(
    positions_by_category: Mapping[Category, Sequence[RawPosition]],
    cash_balances: Sequence[Money],
    reporting_currency: str,
    rates: Mapping[str, Decimal] | None = None,
    totals_by_instrument: Mapping[str, OperationTotals] | None = None,
    logger: Logger | None = None,
) -> Portfolio:
    """Combine per-category assets and cash into a portfolio snapshot.

    Categories without positions are left out of the asset mapping. Cash is
    kept verbatim and counted in the totals at zero income.

    Args:
        positions_by_category: Position records grouped by category.
        cash_balances: Cash balances from the broker.
        reporting_currency: Currency of every total.
        rates: Units of reporting currency per unit of each other currency.
        totals_by_instrument: Operation totals keyed by instrument id.
        logger: Logger used for warnings.

    Returns:
        Portfolio: Assets, cash and consolidated totals.
    """
    logger = logger or _LOGGER
    rates = rates or {}
    reporting_currency = (
        normalize_currency(reporting_currency) or DEFAULT_REPORTING_CURRENCY
    )

    assets: dict[Category, Asset] = {}
    for category in DISPLAY_ORDER:
        positions = positions_by_category.get(category)
        if not positions:
            continue
        assets[category] = build_asset(
            category,
            positions,
            reporting_currency=reporting_currency,
            rates=rates,
            totals_by_instrument=totals_by_instrument,
            logger=logger,
        )

    total_value = Money.zero(reporting_currency)
    cost_basis = Money.zero(reporting_currency)
    dividends = Money.zero(reporting_currency)
    fees = Money.zero(reporting_currency)
    warnings: list[ConversionWarning] = []
    for asset in assets.values():
        total_value += asset.total_value
        cost_basis += asset.cost_basis
        dividends += asset.dividends
        fees += asset.fees
        warnings.extend(asset.warnings)

    for balance in cash_balances:
        converted = convert_money(balance, reporting_currency, rates, logger)
        if converted is None:
            warnings.append(
                ConversionWarning(
                    subject=CASH_SUBJECT,
                    currency=balance.currency,
                    target_currency=reporting_currency,
                )
            )
            continue
        total_value += converted
        cost_basis += converted

    return Portfolio(
        assets=assets,
        cash_balances=tuple(cash_balances),
        total_value=total_value,
        total_income=derive_income(total_value, cost_basis),
        cost_basis=cost_basis,
        dividends=dividends,
        fees=fees,
        reporting_currency=reporting_currency,
        warnings=tuple(warnings),
    )


__all__ = ["assemble_portfolio"]
