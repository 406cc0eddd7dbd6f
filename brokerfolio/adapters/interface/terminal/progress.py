"""rich.progress implementation of the progress port."""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)


class RichProgress:
    """Progress bar shown while per-instrument operations are fetched."""

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True,
        )
        self._task = None

    def start(self, total: int) -> None:
        self._progress.start()
        self._task = self._progress.add_task(
            "[cyan]Fetching operations", total=total
        )

    def advance(self, message: str) -> None:
        if self._task is None:
            return
        self._progress.update(
            self._task,
            advance=1,
            description=f"[cyan]Fetching operations: {message}",
        )

    def finish(self) -> None:
        if self._task is not None:
            self._progress.stop()
            self._task = None


__all__ = ["RichProgress"]
