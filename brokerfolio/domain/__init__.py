"""Domain package for valuation rules and core models."""

from .constants import DEFAULT_LOCALE, DEFAULT_REPORTING_CURRENCY
from .errors import (
    ApiError,
    BrokerfolioError,
    CurrencyMismatchError,
    EmptyHistoryError,
    InstrumentNotFoundError,
    MixedInstrumentsError,
    RateUnavailableError,
)
from .models import (
    Asset,
    Category,
    ConversionWarning,
    HistoryLedger,
    Income,
    InstrumentInfo,
    LedgerEntry,
    Money,
    OperationKind,
    OperationRecord,
    OperationTotals,
    Paper,
    Portfolio,
    RawOperation,
    RawPosition,
)
from .services import (
    assemble_portfolio,
    build_asset,
    build_ledger,
    build_paper,
    convert_money,
    derive_income,
    summarize_operations,
    to_operation_record,
)

__all__ = [
    "DEFAULT_LOCALE",
    "DEFAULT_REPORTING_CURRENCY",
    "ApiError",
    "BrokerfolioError",
    "CurrencyMismatchError",
    "EmptyHistoryError",
    "InstrumentNotFoundError",
    "MixedInstrumentsError",
    "RateUnavailableError",
    "Asset",
    "Category",
    "ConversionWarning",
    "HistoryLedger",
    "Income",
    "InstrumentInfo",
    "LedgerEntry",
    "Money",
    "OperationKind",
    "OperationRecord",
    "OperationTotals",
    "Paper",
    "Portfolio",
    "RawOperation",
    "RawPosition",
    "assemble_portfolio",
    "build_asset",
    "build_ledger",
    "build_paper",
    "convert_money",
    "derive_income",
    "summarize_operations",
    "to_operation_record",
]
