"""httpx-backed client for the Tinkoff Invest REST gateway.

The client implements every application port: positions, cash, rates,
operations and instrument search. Raw JSON is mapped into domain records
here so the rest of the codebase never sees the wire format.
"""

import re
import threading
import time
from datetime import datetime, timezone
from decimal import Decimal

import httpx

from brokerfolio.domain.errors import ApiError, RateUnavailableError
from brokerfolio.domain.models import (
    Category,
    InstrumentInfo,
    Money,
    RawOperation,
    RawPosition,
)
from brokerfolio.domain.services.normalization import normalize_currency
from brokerfolio.infrastructure.logging.logger import get_app_logger
from brokerfolio.infrastructure.settings import (
    ACCOUNT_TYPES,
    DEFAULT_API_URL,
    InvestSettings,
)
from brokerfolio.utils.decimal_utils import coerce_decimal, units_nano_to_decimal

SERVICE_PREFIX = "tinkoff.public.invest.api.contract.v1"

BASE_CURRENCY = "RUB"

DIRECTORY_METHODS = {
    Category.SHARE: "Shares",
    Category.BOND: "Bonds",
    Category.ETF: "Etfs",
    Category.CURRENCY: "Currencies",
    Category.FUTURE: "Futures",
}

OPERATION_STATES = {
    "OPERATION_STATE_EXECUTED": "Executed",
    "OPERATION_STATE_CANCELED": "Canceled",
    "OPERATION_STATE_PROGRESS": "In progress",
}

RETRY_STATUS_CODES = {429, 500, 502, 503, 504}

_FRACTION = re.compile(r"\.(\d+)")


class TinkoffInvestClient:
    """Synchronous client for the broker's REST API.

    Portfolio, account and instrument directories are fetched once per
    client and shared between concurrent callers.
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        account_type: str = ACCOUNT_TYPES["tinkoff"],
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 0.5,
        logger=None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: API token sent as a bearer credential.
            api_url: Base URL of the REST gateway.
            account_type: Preferred account type, e.g. ACCOUNT_TYPE_TINKOFF.
            timeout: Request timeout in seconds.
            max_retries: Attempts per request for transient failures.
            retry_delay: Base delay in seconds between attempts.
            logger: Optional logger compatible with logging.Logger-like API.
            transport: Optional httpx transport, used by tests.
        """
        self._http = httpx.Client(
            base_url=api_url.rstrip("/"),
            timeout=timeout,
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
        )
        self._account_type = account_type
        self._max_retries = max(1, max_retries)
        self._retry_delay = retry_delay
        self._logger = logger or get_app_logger()
        self._lock = threading.Lock()
        self._key_locks: dict = {}
        self._cache: dict = {}

    @classmethod
    def from_settings(cls, settings: InvestSettings, logger=None) -> "TinkoffInvestClient":
        return cls(
            token=settings.require_token(),
            api_url=settings.api_url,
            account_type=settings.account_type,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            logger=logger,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "TinkoffInvestClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Ports

    def fetch_positions(self, category: Category) -> list[RawPosition]:
        directory = {
            item.get("figi"): item for item in self._directory(category)
        }
        positions = []
        for item in self._portfolio_positions():
            if Category.from_instrument_type(item.get("instrumentType")) != category:
                continue
            position = self._to_position(item, category, directory)
            if position is not None:
                positions.append(position)
        return positions

    def fetch_cash_balances(self) -> list[Money]:
        payload = self._post(
            "OperationsService",
            "GetPositions",
            {"accountId": self._resolve_account_id()},
        )
        balances = []
        for item in payload.get("money", []):
            money = self._to_money(item)
            if money is not None:
                balances.append(money)
        return balances

    def fetch_operations(self, instrument_id: str) -> list[RawOperation]:
        payload = self._post(
            "OperationsService",
            "GetOperations",
            {
                "accountId": self._resolve_account_id(),
                "figi": instrument_id,
                "state": "OPERATION_STATE_EXECUTED",
            },
        )
        return [
            self._to_operation(item, instrument_id)
            for item in payload.get("operations", [])
        ]

    def find_instruments(self, ticker: str) -> list[InstrumentInfo]:
        payload = self._post(
            "InstrumentsService",
            "FindInstrument",
            {
                "query": ticker,
                "instrumentKind": "INSTRUMENT_TYPE_UNSPECIFIED",
                "apiTradeAvailableFlag": False,
            },
        )
        return [
            InstrumentInfo(
                instrument_id=item.get("figi", ""),
                ticker=item.get("ticker", ""),
                name=item.get("name", ""),
                category=Category.from_instrument_type(
                    item.get("instrumentType")
                ),
            )
            for item in payload.get("instruments", [])
            if item.get("figi")
        ]

    def fetch_rate(self, from_currency: str, to_currency: str) -> Decimal:
        source = normalize_currency(from_currency)
        target = normalize_currency(to_currency)
        if source == target:
            return Decimal("1")
        try:
            source_rate = self._base_rate(source)
            target_rate = self._base_rate(target)
        except ApiError as exc:
            raise RateUnavailableError(from_currency, to_currency) from exc
        if source_rate is None or target_rate is None:
            raise RateUnavailableError(from_currency, to_currency)
        return source_rate / target_rate

    # Cached lookups

    def _cached(self, key, loader):
        """Load ``key`` once, holding a per-key lock across the fetch."""
        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())
        with key_lock:
            if key not in self._cache:
                self._cache[key] = loader()
            return self._cache[key]

    def _resolve_account_id(self) -> str:
        return self._cached("account", self._load_account_id)

    def _load_account_id(self) -> str:
        payload = self._post("UsersService", "GetAccounts", {})
        accounts = payload.get("accounts", [])
        if not accounts:
            raise ApiError("No brokerage accounts available for this token")
        account = next(
            (a for a in accounts if a.get("type") == self._account_type),
            None,
        )
        if account is None:
            self._logger.warning(
                f"No {self._account_type} account, using the first account"
            )
            account = accounts[0]
        return account["id"]

    def _portfolio_positions(self) -> list[dict]:
        return self._cached("portfolio", self._load_portfolio)

    def _load_portfolio(self) -> list[dict]:
        payload = self._post(
            "OperationsService",
            "GetPortfolio",
            {
                "accountId": self._resolve_account_id(),
                "currency": BASE_CURRENCY,
            },
        )
        return payload.get("positions", [])

    def _directory(self, category: Category) -> list[dict]:
        def _load() -> list[dict]:
            payload = self._post(
                "InstrumentsService",
                DIRECTORY_METHODS[category],
                {"instrumentStatus": "INSTRUMENT_STATUS_ALL"},
            )
            return payload.get("instruments", [])

        return self._cached(("directory", category), _load)

    def _base_rate(self, currency: str) -> Decimal | None:
        """Return the price of one unit of ``currency`` in roubles.

        Currency instruments may be quoted per lot of several units
        (100 JPY, for example), so the price is divided by the nominal.
        """
        if currency == BASE_CURRENCY:
            return Decimal("1")
        candidates = [
            item
            for item in self._directory(Category.CURRENCY)
            if normalize_currency(item.get("isoCurrencyName")) == currency
        ]
        if not candidates:
            return None
        candidates.sort(
            key=lambda item: not str(item.get("ticker", "")).endswith("TOM")
        )
        instrument = candidates[0]
        figi = instrument.get("figi")
        payload = self._post(
            "MarketDataService",
            "GetLastPrices",
            {"figi": [figi]},
        )
        for item in payload.get("lastPrices", []):
            if item.get("figi") != figi:
                continue
            price = self._to_decimal(item.get("price"))
            if price <= 0:
                return None
            nominal = self._to_decimal(instrument.get("nominal"))
            return price / nominal if nominal > 0 else price
        return None

    # Transport

    def _post(self, service: str, method: str, payload: dict) -> dict:
        """Call a gateway method, retrying transient failures.

        Raises:
            ApiError: If the request fails or returns a non-2xx status.
        """
        url = f"/{SERVICE_PREFIX}.{service}/{method}"
        last_error: Exception | None = None
        for attempt in range(1, self._max_retries + 1):
            try:
                response = self._http.post(url, json=payload)
            except httpx.HTTPError as exc:
                last_error = exc
                self._logger.warning(
                    f"{service}/{method} attempt {attempt} failed: {exc}"
                )
            else:
                if response.status_code in RETRY_STATUS_CODES:
                    last_error = ApiError(self._describe(response))
                    self._logger.warning(
                        f"{service}/{method} attempt {attempt} failed: "
                        f"{last_error}"
                    )
                elif response.is_error:
                    raise ApiError(self._describe(response))
                else:
                    try:
                        return response.json()
                    except ValueError as exc:
                        raise ApiError(
                            f"{service}/{method} returned invalid JSON"
                        ) from exc
            if attempt < self._max_retries:
                time.sleep(self._retry_delay * attempt)
        raise ApiError(
            f"{service}/{method} failed after {self._max_retries} attempts"
        ) from last_error

    @staticmethod
    def _describe(response: httpx.Response) -> str:
        message = response.text
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            message = body["message"]
        return f"HTTP {response.status_code} from {response.request.url.path}: {message}"

    # Mapping

    def _to_position(
        self,
        item: dict,
        category: Category,
        directory: dict,
    ) -> RawPosition | None:
        figi = item.get("figi", "")
        average_price = self._to_money(item.get("averagePositionPrice"))
        current_price = self._to_money(item.get("currentPrice"))
        if average_price is None or current_price is None:
            self._logger.warning(f"Skipping position {figi}: missing prices")
            return None
        instrument = directory.get(figi, {})
        if not instrument:
            self._logger.warning(f"Instrument {figi} missing from directory")
        return RawPosition(
            instrument_id=figi,
            ticker=instrument.get("ticker", figi),
            name=instrument.get("name", ""),
            category=category,
            quantity=self._to_decimal(item.get("quantity")),
            average_price=average_price,
            current_price=current_price,
        )

    def _to_operation(self, item: dict, instrument_id: str) -> RawOperation:
        currency = normalize_currency(item.get("currency")) or BASE_CURRENCY
        return RawOperation(
            operation_id=item.get("id", ""),
            instrument_id=item.get("figi") or instrument_id,
            timestamp=self._to_datetime(item.get("date")),
            operation_type=item.get("operationType", ""),
            currency=currency,
            payment=self._to_money(item.get("payment")),
            price=self._to_money(item.get("price")),
            quantity=coerce_decimal(item.get("quantity")),
            quantity_rest=coerce_decimal(item.get("quantityRest")),
            description=item.get("type", ""),
            state=OPERATION_STATES.get(item.get("state"), "Not specified"),
        )

    @staticmethod
    def _to_decimal(value: dict | None) -> Decimal:
        if not value:
            return Decimal("0")
        return units_nano_to_decimal(value.get("units"), value.get("nano"))

    @classmethod
    def _to_money(cls, value: dict | None) -> Money | None:
        if not value:
            return None
        currency = normalize_currency(value.get("currency"))
        if currency is None:
            return None
        return Money(cls._to_decimal(value), currency)

    @staticmethod
    def _to_datetime(value: str | None) -> datetime:
        if not value:
            return datetime.fromtimestamp(0, tz=timezone.utc)
        text = value.replace("Z", "+00:00")
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ApiError(f"Invalid operation date: {value!r}") from exc
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


__all__ = ["TinkoffInvestClient", "SERVICE_PREFIX"]
