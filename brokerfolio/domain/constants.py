"""Domain constants for portfolio valuation."""

from decimal import Decimal

HUNDRED = Decimal("100")

DEFAULT_REPORTING_CURRENCY = "RUB"

DEFAULT_LOCALE = "en_US"

DISPLAY_PRECISION = 2

# Thousands separator and decimal point per locale.
LOCALE_SEPARATORS = {
    "en_US": (",", "."),
    "en_GB": (",", "."),
    "ru_RU": ("\u00a0", ","),
    "de_DE": (".", ","),
    "fr_FR": ("\u202f", ","),
}

CURRENCY_SYMBOLS = {
    "RUB": "₽",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "CNY": "¥",
    "JPY": "¥",
    "HKD": "HK$",
    "CHF": "₣",
    "TRY": "₺",
    "KZT": "₸",
    "BYN": "Br",
    "AMD": "֏",
}


__all__ = [
    "HUNDRED",
    "DEFAULT_REPORTING_CURRENCY",
    "DEFAULT_LOCALE",
    "DISPLAY_PRECISION",
    "LOCALE_SEPARATORS",
    "CURRENCY_SYMBOLS",
]
