"""Domain models for an instrument's operation history."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from brokerfolio.domain.models.money import Money


class OperationKind(str, Enum):
    """Category of a trading or account operation."""

    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"
    COUPON = "coupon"
    INTEREST = "interest"
    FEE = "fee"
    TAX = "tax"
    OTHER = "other"


@dataclass(frozen=True)
class OperationRecord:
    """Operation mapped from a raw API record.

    The payment keeps the sign supplied by the broker: money paid out is
    negative and money received is positive.
    """

    timestamp: datetime
    kind: OperationKind
    payment: Money
    quantity: Decimal
    price: Money
    operation_id: str = ""
    instrument_id: str = ""
    quantity_rest: Decimal = Decimal("0")
    description: str = ""
    state: str = ""


@dataclass(frozen=True)
class LedgerEntry:
    """Operation with the cumulative payment up to and including it."""

    record: OperationRecord
    running_total: Money


@dataclass(frozen=True)
class HistoryLedger:
    """Time-ordered operations of one instrument with running totals."""

    entries: tuple[LedgerEntry, ...]
    running_total: Money
    instrument_id: str = ""

    @property
    def currency(self) -> str:
        return self.running_total.currency

    @property
    def records(self) -> tuple[OperationRecord, ...]:
        return tuple(entry.record for entry in self.entries)

    def is_empty(self) -> bool:
        return not self.entries

    def totals_by_kind(self) -> dict[OperationKind, Money]:
        """Sum payments per operation kind, in order of first appearance."""
        totals: dict[OperationKind, Money] = {}
        for entry in self.entries:
            kind = entry.record.kind
            payment = entry.record.payment
            totals[kind] = totals.get(kind, Money.zero(payment.currency)) + payment
        return totals


__all__ = [
    "OperationKind",
    "OperationRecord",
    "LedgerEntry",
    "HistoryLedger",
]
