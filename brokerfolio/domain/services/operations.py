"""Domain services mapping broker operations to categorized records."""

from collections.abc import Iterable
from logging import Logger

from brokerfolio.domain.models import (
    Money,
    OperationKind,
    OperationRecord,
    OperationTotals,
    RawOperation,
)

OPERATION_TYPE_PREFIX = "OPERATION_TYPE_"

OPERATION_KINDS = {
    "BUY": OperationKind.BUY,
    "BUY_CARD": OperationKind.BUY,
    "BUY_MARGIN": OperationKind.BUY,
    "DELIVERY_BUY": OperationKind.BUY,
    "SELL": OperationKind.SELL,
    "SELL_CARD": OperationKind.SELL,
    "SELL_MARGIN": OperationKind.SELL,
    "DELIVERY_SELL": OperationKind.SELL,
    "BOND_REPAYMENT": OperationKind.SELL,
    "BOND_REPAYMENT_FULL": OperationKind.SELL,
    "DIVIDEND": OperationKind.DIVIDEND,
    "DIVIDEND_TRANSFER": OperationKind.DIVIDEND,
    "DIV_EXT": OperationKind.DIVIDEND,
    "COUPON": OperationKind.COUPON,
    "OVERNIGHT": OperationKind.INTEREST,
    "TAX": OperationKind.TAX,
    "TAX_PROGRESSIVE": OperationKind.TAX,
    "TAX_CORRECTION": OperationKind.TAX,
    "TAX_CORRECTION_COUPON": OperationKind.TAX,
    "DIVIDEND_TAX": OperationKind.TAX,
    "DIVIDEND_TAX_PROGRESSIVE": OperationKind.TAX,
    "BOND_TAX": OperationKind.TAX,
    "BOND_TAX_PROGRESSIVE": OperationKind.TAX,
    "BENEFIT_TAX": OperationKind.TAX,
    "BENEFIT_TAX_PROGRESSIVE": OperationKind.TAX,
    "BROKER_FEE": OperationKind.FEE,
    "SERVICE_FEE": OperationKind.FEE,
    "MARGIN_FEE": OperationKind.FEE,
    "SUCCESS_FEE": OperationKind.FEE,
    "TRACK_MFEE": OperationKind.FEE,
    "TRACK_PFEE": OperationKind.FEE,
    "CASH_FEE": OperationKind.FEE,
    "OUT_FEE": OperationKind.FEE,
    "OUT_STAMP_DUTY": OperationKind.FEE,
    "ADVICE_FEE": OperationKind.FEE,
    "OUTPUT_PENALTY": OperationKind.FEE,
}


def classify_operation(operation_type: str | None) -> OperationKind:
    """Map a broker operation type such as ``OPERATION_TYPE_COUPON``.

    Args:
        operation_type: Operation type name, with or without its prefix.

    Returns:
        OperationKind: Matching kind, or OTHER for anything unlisted.
    """
    if not operation_type:
        return OperationKind.OTHER
    key = operation_type.strip().upper()
    if key.startswith(OPERATION_TYPE_PREFIX):
        key = key[len(OPERATION_TYPE_PREFIX):]
    return OPERATION_KINDS.get(key, OperationKind.OTHER)


def to_operation_record(raw: RawOperation) -> OperationRecord:
    """Map a raw operation to a record, filling missing money with zero."""
    payment = raw.payment or Money.zero(raw.currency)
    price = raw.price or Money.zero(payment.currency)
    return OperationRecord(
        timestamp=raw.timestamp,
        kind=classify_operation(raw.operation_type),
        payment=payment,
        quantity=raw.quantity,
        price=price,
        operation_id=raw.operation_id,
        instrument_id=raw.instrument_id,
        quantity_rest=raw.quantity_rest,
        description=raw.description,
        state=raw.state,
    )


def summarize_operations(
    records: Iterable[OperationRecord],
    currency: str,
    logger: Logger,
) -> OperationTotals:
    """Sum income, tax and fee payments of one instrument.

    Dividends, coupons and overnight interest all count as income.

    Args:
        records: Operations of a single instrument.
        currency: Currency the instrument is priced in.
        logger: Logger used for warnings.

    Returns:
        OperationTotals: Totals in ``currency``; trades are not counted.
    """
    dividends = Money.zero(currency)
    taxes = Money.zero(currency)
    fees = Money.zero(currency)
    for record in records:
        if record.kind not in (
            OperationKind.DIVIDEND,
            OperationKind.COUPON,
            OperationKind.INTEREST,
            OperationKind.TAX,
            OperationKind.FEE,
        ):
            continue
        payment = record.payment
        if payment.currency != currency:
            logger.warning(
                f"Skipping {record.kind.value} payment in {payment.currency} "
                f"for an instrument priced in {currency}"
            )
            continue
        if record.kind == OperationKind.TAX:
            taxes += payment
        elif record.kind == OperationKind.FEE:
            fees += payment
        else:
            dividends += payment
    return OperationTotals(
        dividends_and_coupons=dividends,
        taxes=taxes,
        fees=fees,
    )


__all__ = [
    "OPERATION_KINDS",
    "classify_operation",
    "to_operation_record",
    "summarize_operations",
]
