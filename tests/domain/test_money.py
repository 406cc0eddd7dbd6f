"""Tests for the Money value object and income formatting."""

from decimal import Decimal

import pytest

from brokerfolio.domain.errors import CurrencyMismatchError
from brokerfolio.domain.models import Income, Money, currency_symbol


def test_money_normalizes_currency_and_amount() -> None:
    """Currency codes should be upper-cased and amounts made Decimal."""
    money = Money("10.5", " usd ")

    assert money.currency == "USD"
    assert money.amount == Decimal("10.5")


def test_money_rejects_empty_currency() -> None:
    """An empty currency code is not a valid Money."""
    with pytest.raises(ValueError):
        Money(Decimal("1"), " ")


def test_money_arithmetic_keeps_exact_decimals() -> None:
    """Adding tenths should not drift like floats do."""
    total = Money.of("0.1", "RUB") + Money.of("0.2", "RUB")

    assert total == Money(Decimal("0.3"), "RUB")
    assert (total - Money.of("0.3", "RUB")).is_zero()


def test_money_rejects_mixed_currencies() -> None:
    """Arithmetic and comparison across currencies should fail."""
    rub = Money.of(1, "RUB")
    usd = Money.of(1, "USD")

    with pytest.raises(CurrencyMismatchError):
        rub + usd
    with pytest.raises(CurrencyMismatchError) as excinfo:
        rub - usd
    assert (excinfo.value.left, excinfo.value.right) == ("RUB", "USD")
    with pytest.raises(CurrencyMismatchError):
        usd.subtract(rub)
    with pytest.raises(CurrencyMismatchError):
        rub.compare(usd)


@pytest.mark.parametrize(
    "left, right",
    [
        ("0.1", "0.2"),
        ("0.000000001", "999999999.999999999"),
        ("-250.5", "13.000000007"),
        ("1e-9", "-0.000000001"),
    ],
)
def test_money_add_then_subtract_restores_amount(left, right) -> None:
    """Adding and removing a value keeps nano precision exactly."""
    start = Money.of(left, "RUB")
    delta = Money.of(right, "RUB")

    assert (start + delta) - delta == start
    assert ((start + delta) - delta).amount == Decimal(left)


def test_money_compare_and_ordering() -> None:
    """compare returns -1/0/1 and drives the ordering operators."""
    low = Money.of(1, "EUR")
    high = Money.of(2, "EUR")

    assert low.compare(high) == -1
    assert high.compare(low) == 1
    assert low.compare(Money.of("1.00", "EUR")) == 0
    assert low < high
    assert max([low, high]) is high


def test_money_multiply_convert_and_negate() -> None:
    """Scaling helpers should return new values."""
    price = Money.of("250", "RUB")

    assert price.multiply(100) == Money.of("25000", "RUB")
    assert Money.of("10", "USD").convert(Decimal("90.5"), "RUB") == Money.of(
        "905.0",
        "RUB",
    )
    assert price.negate().is_negative()


def test_money_format_uses_locale_grouping() -> None:
    """format should round to 2 places with locale separators."""
    money = Money.of("1234567.891", "RUB")

    assert money.format("en_US") == "1,234,567.89 ₽"
    assert money.format("de_DE") == "1.234.567,89 ₽"
    assert money.format("ru_RU") == "1 234 567,89 ₽"
    assert str(Money.of("5", "XYZ")) == "5.00 XYZ"


def test_currency_symbol_falls_back_to_code() -> None:
    """Unknown codes should render as the code itself."""
    assert currency_symbol("USD") == "$"
    assert currency_symbol("ABC") == "ABC"


def test_income_format_rounds_percent_only_for_display() -> None:
    """The percent keeps precision while formatting rounds it."""
    income = Income(
        absolute=Money.of("-10", "USD"),
        percent=Decimal("-3.33333"),
    )

    assert income.percent == Decimal("-3.33333")
    assert income.rounded_percent() == Decimal("-3.33")
    assert income.format() == "-10.00 $ (-3.33%)"
    assert income.is_negative()
    assert not income.is_zero()
