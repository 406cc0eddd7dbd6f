"""Settings helpers for infrastructure adapters."""

import os
from dataclasses import dataclass
from typing import Optional

from brokerfolio.domain.constants import DEFAULT_LOCALE, DEFAULT_REPORTING_CURRENCY
from brokerfolio.domain.services.normalization import normalize_currency
from brokerfolio.infrastructure.logging.logger import get_app_logger

DEFAULT_API_URL = "https://invest-public-api.tinkoff.ru/rest"

ACCOUNT_TYPES = {
    "tinkoff": "ACCOUNT_TYPE_TINKOFF",
    "iis": "ACCOUNT_TYPE_TINKOFF_IIS",
    "invest_box": "ACCOUNT_TYPE_INVEST_BOX",
}


@dataclass(frozen=True)
class InvestSettings:
    """Settings for the broker API client and report rendering.

    Attributes:
        token: API token; required only when a client is built.
        api_url: Base URL of the REST gateway.
        account_type: Broker account type the report is built for.
        reporting_currency: Currency of the cross-category totals.
        locale: Locale used when formatting money.
        timeout: Request timeout in seconds.
        max_retries: Attempts per request before giving up.
        fetch_workers: Concurrent requests during fan-out.
    """

    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    account_type: str = ACCOUNT_TYPES["tinkoff"]
    reporting_currency: str = DEFAULT_REPORTING_CURRENCY
    locale: str = DEFAULT_LOCALE
    timeout: float = 30.0
    max_retries: int = 3
    fetch_workers: int = 4

    @classmethod
    def from_env(cls) -> "InvestSettings":
        """Build settings from environment variables.

        Returns:
            InvestSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        raw_account = os.getenv("TINKOFF_ACCOUNT_TYPE", "tinkoff").strip().lower()
        account_type = ACCOUNT_TYPES.get(raw_account)
        if account_type is None:
            logger.warning(
                f"Unknown account type '{raw_account}', using tinkoff"
            )
            account_type = ACCOUNT_TYPES["tinkoff"]
        return cls(
            token=os.getenv("TINKOFF_TOKEN_V2") or None,
            api_url=os.getenv("TINKOFF_API_URL", DEFAULT_API_URL).rstrip("/"),
            account_type=account_type,
            reporting_currency=normalize_currency(
                os.getenv("REPORTING_CURRENCY")
            )
            or DEFAULT_REPORTING_CURRENCY,
            locale=os.getenv("REPORT_LOCALE", DEFAULT_LOCALE).strip()
            or DEFAULT_LOCALE,
            timeout=cls._parse_number(
                "TINKOFF_TIMEOUT", 30.0, float, logger=logger
            ),
            max_retries=cls._parse_number(
                "TINKOFF_MAX_RETRIES", 3, int, logger=logger
            ),
            fetch_workers=cls._parse_number(
                "FETCH_WORKERS", 4, int, logger=logger
            ),
        )

    def require_token(self) -> str:
        """Return the API token or raise a descriptive error.

        Raises:
            RuntimeError: If the token is missing.
        """
        if not self.token:
            raise RuntimeError(
                "Missing environment variable: TINKOFF_TOKEN_V2"
            )
        return self.token

    @staticmethod
    def _parse_number(name: str, default, cast, logger):
        """Read a positive number from the environment.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            cast: Numeric type to convert to.
            logger: Logger used for warnings.

        Returns:
            The parsed number, or ``default``.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = cast(raw.strip())
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}, using {default}")
            return default
        if value <= 0:
            logger.warning(f"Non-positive {name}={raw!r}, using {default}")
            return default
        return value


__all__ = ["InvestSettings", "ACCOUNT_TYPES", "DEFAULT_API_URL"]
