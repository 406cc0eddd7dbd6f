"""Port for currency conversion rates."""

from decimal import Decimal
from typing import Protocol


class RateSourcePort(Protocol):
    """Port exposing conversion rates between currencies."""

    def fetch_rate(self, from_currency: str, to_currency: str) -> Decimal:
        """Return units of ``to_currency`` per unit of ``from_currency``.

        Raises:
            RateUnavailableError: If no rate can be determined.
        """


__all__ = ["RateSourcePort"]
