"""Application ports package."""

from .operations import InstrumentLookupPort, OperationSourcePort
from .positions import CashSourcePort, PositionSourcePort
from .progress import NullProgress, ProgressPort
from .quotes import RateSourcePort

__all__ = [
    "CashSourcePort",
    "InstrumentLookupPort",
    "NullProgress",
    "OperationSourcePort",
    "PositionSourcePort",
    "ProgressPort",
    "RateSourcePort",
]
