"""Domain services for operation history ledgers."""

from collections.abc import Iterable

from brokerfolio.domain.constants import DEFAULT_REPORTING_CURRENCY
from brokerfolio.domain.errors import EmptyHistoryError, MixedInstrumentsError
from brokerfolio.domain.models import (
    HistoryLedger,
    LedgerEntry,
    Money,
    OperationRecord,
)


def build_ledger(
    operations: Iterable[OperationRecord],
    *,
    require_non_empty: bool = False,
    currency: str = DEFAULT_REPORTING_CURRENCY,
) -> HistoryLedger:
    """Order one instrument's operations and accumulate their payments.

    The sort is stable, so records sharing a timestamp keep their input
    order. Payments are summed with the sign the broker supplied. A record
    repeating an earlier non-empty operation id is dropped.

    Args:
        operations: Operation records of a single instrument.
        require_non_empty: Fail instead of returning an empty ledger.
        currency: Currency of the zero total of an empty ledger.

    Returns:
        HistoryLedger: Entries sorted by timestamp with running totals.

    Raises:
        EmptyHistoryError: If no operations were given and
            ``require_non_empty`` is set.
        CurrencyMismatchError: If payments are in different currencies.
        MixedInstrumentsError: If records belong to different instruments.
    """
    seen_ids: set[str] = set()
    unique: list[OperationRecord] = []
    for record in operations:
        if record.operation_id:
            if record.operation_id in seen_ids:
                continue
            seen_ids.add(record.operation_id)
        unique.append(record)

    if not unique:
        if require_non_empty:
            raise EmptyHistoryError("No operations found for the instrument")
        return HistoryLedger(entries=(), running_total=Money.zero(currency))

    instrument_ids = {r.instrument_id for r in unique if r.instrument_id}
    if len(instrument_ids) > 1:
        raise MixedInstrumentsError(instrument_ids)

    ordered = sorted(unique, key=lambda record: record.timestamp)
    running_total = Money.zero(ordered[0].payment.currency)
    entries = []
    for record in ordered:
        running_total += record.payment
        entries.append(LedgerEntry(record=record, running_total=running_total))

    return HistoryLedger(
        entries=tuple(entries),
        running_total=running_total,
        instrument_id=next(iter(instrument_ids), ""),
    )


__all__ = ["build_ledger"]
