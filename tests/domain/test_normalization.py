"""Tests for normalization and decimal helpers."""

from decimal import Decimal

from brokerfolio.domain.services import normalize_currency, normalize_ticker
from brokerfolio.utils.decimal_utils import coerce_decimal, units_nano_to_decimal


def test_normalize_currency_and_ticker() -> None:
    """Codes are stripped and upper-cased, blanks become None."""
    assert normalize_currency(" usd ") == "USD"
    assert normalize_currency("") is None
    assert normalize_currency(None) is None
    assert normalize_ticker("sber\n") == "SBER"
    assert normalize_ticker("   ") is None


def test_units_nano_to_decimal_is_exact() -> None:
    """Nano is billionths of a unit, including for string units."""
    assert units_nano_to_decimal("270", 500000000) == Decimal("270.5")
    assert units_nano_to_decimal(0, 10000000) == Decimal("0.01")
    assert units_nano_to_decimal(-1, -500000000) == Decimal("-1.5")
    assert units_nano_to_decimal(None, None) == Decimal("0")


def test_coerce_decimal_avoids_float_noise() -> None:
    """Floats are converted through their string form."""
    assert coerce_decimal(0.1) == Decimal("0.1")
    assert coerce_decimal(None) == Decimal("0")
