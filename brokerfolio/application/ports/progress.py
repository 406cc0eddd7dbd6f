"""Port for reporting progress of long-running fetches."""

from typing import Protocol


class ProgressPort(Protocol):
    """Port receiving progress updates from use cases."""

    def start(self, total: int) -> None:
        """Begin tracking ``total`` steps."""

    def advance(self, message: str) -> None:
        """Mark one step as done."""

    def finish(self) -> None:
        """Stop tracking progress."""


class NullProgress:
    """Progress sink that ignores every update."""

    def start(self, total: int) -> None:
        return None

    def advance(self, message: str) -> None:
        return None

    def finish(self) -> None:
        return None


__all__ = ["ProgressPort", "NullProgress"]
