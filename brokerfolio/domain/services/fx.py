"""Domain services for currency conversion."""

from collections.abc import Mapping
from decimal import Decimal
from logging import Logger

from brokerfolio.domain.models import Money


def convert_money(
    money: Money,
    target_currency: str,
    rates: Mapping[str, Decimal],
    logger: Logger,
) -> Money | None:
    """Convert a value into the target currency.

    Args:
        money: Value in its own currency.
        target_currency: Reporting currency code.
        rates: Units of target currency per unit of each source currency.
        logger: Logger used for warnings.

    Returns:
        Money | None: Converted value or None when no rate is available.
    """
    if money.currency == target_currency:
        return money
    rate = rates.get(money.currency)
    if rate is None:
        logger.warning(
            f"Missing FX rate for {money.currency} to {target_currency}"
        )
        return None
    return money.convert(rate, target_currency)


__all__ = ["convert_money"]
