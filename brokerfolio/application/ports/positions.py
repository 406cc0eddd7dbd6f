"""Ports for reading portfolio positions and cash."""

from typing import Protocol

from brokerfolio.domain.models import Category, Money, RawPosition


class PositionSourcePort(Protocol):
    """Port exposing the account's positions per category."""

    def fetch_positions(self, category: Category) -> list[RawPosition]:
        """Return positions of one category in API order.

        Raises:
            ApiError: If the request fails.
        """


class CashSourcePort(Protocol):
    """Port exposing the account's cash balances."""

    def fetch_cash_balances(self) -> list[Money]:
        """Return cash balances, one per currency.

        Raises:
            ApiError: If the request fails.
        """


__all__ = ["PositionSourcePort", "CashSourcePort"]
