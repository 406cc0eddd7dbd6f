"""Domain normalization helpers."""


def normalize_currency(currency: str | None) -> str | None:
    """Normalize ISO currency codes.

    Args:
        currency: Raw currency code from the API (often lower case).

    Returns:
        str | None: Upper-cased code, or None when blank.
    """
    if not currency:
        return None
    cleaned = currency.strip()
    return cleaned.upper() if cleaned else None


def normalize_ticker(ticker: str | None) -> str | None:
    """Normalize instrument tickers.

    Args:
        ticker: Raw ticker typed by the user or returned by the API.

    Returns:
        str | None: Upper-cased ticker, or None when blank.
    """
    if not ticker:
        return None
    cleaned = ticker.strip()
    return cleaned.upper() if cleaned else None


__all__ = ["normalize_currency", "normalize_ticker"]
