"""Domain models package."""

from .history import HistoryLedger, LedgerEntry, OperationKind, OperationRecord
from .income import Income
from .instrument import DISPLAY_ORDER, Category, InstrumentInfo
from .money import Money, currency_symbol
from .paper import OperationTotals, Paper
from .portfolio import Asset, ConversionWarning, Portfolio
from .rows import RawOperation, RawPosition

__all__ = [
    "Money",
    "currency_symbol",
    "Income",
    "Category",
    "DISPLAY_ORDER",
    "InstrumentInfo",
    "RawPosition",
    "RawOperation",
    "OperationTotals",
    "Paper",
    "ConversionWarning",
    "Asset",
    "Portfolio",
    "OperationKind",
    "OperationRecord",
    "LedgerEntry",
    "HistoryLedger",
]
