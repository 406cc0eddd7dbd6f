"""Domain services for building papers and per-category assets."""

import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal
from logging import Logger

from brokerfolio.domain.constants import DEFAULT_REPORTING_CURRENCY
from brokerfolio.domain.models import (
    Asset,
    Category,
    ConversionWarning,
    Money,
    OperationTotals,
    Paper,
    RawPosition,
)
from brokerfolio.domain.services.fx import convert_money
from brokerfolio.domain.services.income import derive_income
from brokerfolio.domain.services.normalization import normalize_currency
from brokerfolio.domain.services.validation import validate_position

_LOGGER = logging.getLogger(__name__)


def build_paper(
    position: RawPosition,
    totals: OperationTotals | None = None,
) -> Paper:
    """Map a position record to a Paper.

    Prices are taken as reported; only the income is computed.

    Args:
        position: Position record from the broker.
        totals: Optional dividend, tax and fee totals for the instrument.

    Returns:
        Paper: Immutable paper for the snapshot.

    Raises:
        CurrencyMismatchError: If the average and current prices differ in
            currency.
    """
    totals = totals or OperationTotals.zero(position.currency)
    current_value = position.current_price.multiply(position.quantity)
    cost_basis = position.average_price.multiply(position.quantity)
    return Paper(
        instrument_id=position.instrument_id,
        ticker=position.ticker,
        name=position.name,
        quantity=position.quantity,
        average_price=position.average_price,
        current_price=position.current_price,
        income=derive_income(current_value, cost_basis),
        dividends_and_coupons=totals.dividends_and_coupons,
        taxes=totals.taxes,
        fees=totals.fees,
    )


def build_asset(
    category: Category,
    positions: Sequence[RawPosition],
    reporting_currency: str | None = None,
    rates: Mapping[str, Decimal] | None = None,
    totals_by_instrument: Mapping[str, OperationTotals] | None = None,
    logger: Logger | None = None,
) -> Asset:
    """Aggregate the positions of one category.

    Papers keep the input order. Each paper's value is converted into the
    reporting currency; a paper whose currency has no rate stays in the
    paper list but is left out of every total and recorded as a warning.

    Args:
        category: Category shared by the positions.
        positions: Position records in API order.
        reporting_currency: Currency of the totals. Defaults to the first
            paper's currency.
        rates: Units of reporting currency per unit of each other currency.
        totals_by_instrument: Operation totals keyed by instrument id.
        logger: Logger used for warnings.

    Returns:
        Asset: Papers with their aggregate valuation.
    """
    logger = logger or _LOGGER
    rates = rates or {}
    totals_by_instrument = totals_by_instrument or {}

    papers = []
    for position in positions:
        validate_position(position, logger)
        papers.append(
            build_paper(position, totals_by_instrument.get(position.instrument_id))
        )

    currency = normalize_currency(reporting_currency) or (
        papers[0].currency if papers else DEFAULT_REPORTING_CURRENCY
    )
    total_value = Money.zero(currency)
    cost_basis = Money.zero(currency)
    dividends = Money.zero(currency)
    fees = Money.zero(currency)
    value_by_currency: dict[str, Money] = {}
    warnings: list[ConversionWarning] = []

    for paper in papers:
        value_by_currency[paper.currency] = (
            value_by_currency.get(paper.currency, Money.zero(paper.currency))
            + paper.current_value
        )
        converted_value = convert_money(
            paper.current_value,
            currency,
            rates,
            logger,
        )
        if converted_value is None:
            warnings.append(
                ConversionWarning(
                    subject=paper.ticker or paper.instrument_id,
                    currency=paper.currency,
                    target_currency=currency,
                )
            )
            continue
        rate = (
            Decimal("1") if paper.currency == currency else rates[paper.currency]
        )
        total_value += converted_value
        cost_basis += paper.cost_basis.convert(rate, currency)
        dividends += paper.net_payments.convert(rate, currency)
        fees += paper.fees.convert(rate, currency)

    return Asset(
        category=category,
        papers=tuple(papers),
        total_value=total_value,
        total_income=derive_income(total_value, cost_basis),
        cost_basis=cost_basis,
        dividends=dividends,
        fees=fees,
        value_by_currency=value_by_currency,
        warnings=tuple(warnings),
    )


__all__ = ["build_paper", "build_asset"]
