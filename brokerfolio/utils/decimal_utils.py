"""Helpers for Decimal normalization."""

from decimal import Decimal

NANO_EXPONENT = -9


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from the API or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def units_nano_to_decimal(units, nano) -> Decimal:
    """Combine an integer part and billionths into a Decimal.

    The broker encodes ``Quotation`` and ``MoneyValue`` numbers as a pair of
    integers where ``nano`` carries the same sign as ``units``.

    Args:
        units: Integer part, possibly serialized as a string.
        nano: Fractional part in billionths.

    Returns:
        Decimal: Exact value of ``units + nano / 10**9``.
    """
    whole = Decimal(int(units or 0))
    fraction = Decimal(int(nano or 0)).scaleb(NANO_EXPONENT)
    return whole + fraction


__all__ = ["coerce_decimal", "units_nano_to_decimal"]
