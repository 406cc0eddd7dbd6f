"""Domain services package."""

from .assets import build_asset, build_paper
from .fx import convert_money
from .income import aggregate_total_income, derive_income, total_income
from .ledger import build_ledger
from .normalization import normalize_currency, normalize_ticker
from .operations import (
    classify_operation,
    summarize_operations,
    to_operation_record,
)
from .portfolio import assemble_portfolio
from .validation import validate_position

__all__ = [
    "aggregate_total_income",
    "assemble_portfolio",
    "build_asset",
    "build_ledger",
    "build_paper",
    "classify_operation",
    "convert_money",
    "derive_income",
    "normalize_currency",
    "normalize_ticker",
    "summarize_operations",
    "to_operation_record",
    "total_income",
    "validate_position",
]
