"""Application logging helpers.

Loggers write to ``<project root>/logs/<subdir>/<YYYYMMDD>_<prefix>.log``
and optionally to the console. ``get_app_logger`` returns the shared
application logger used by use cases and adapters.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Callable

from brokerfolio.utils.utils import get_project_root

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class LoggerBuilder:
    """Fluent builder for configured ``logging.Logger`` instances."""

    def __init__(self) -> None:
        self._name = "brokerfolio"
        self._subdir = "app"
        self._prefix = "app_logs"
        self._console = False
        self._level = logging.INFO
        self._formatter_factory: Callable[[], logging.Formatter] = (
            LoggerBuilder._default_formatter
        )
        self._file_handler_factory: Callable[
            [Path, logging.Formatter], logging.Handler
        ] = LoggerBuilder._default_file_handler
        self._console_handler_factory: Callable[
            [logging.Formatter], logging.Handler
        ] = LoggerBuilder._default_console_handler

    def name(self, name: str) -> "LoggerBuilder":
        self._name = name
        return self

    def subdir(self, subdir: str) -> "LoggerBuilder":
        self._subdir = subdir
        return self

    def prefix(self, prefix: str) -> "LoggerBuilder":
        self._prefix = prefix
        return self

    def console(self, enabled: bool) -> "LoggerBuilder":
        self._console = enabled
        return self

    def level(self, level: int) -> "LoggerBuilder":
        self._level = level
        return self

    def formatter(
        self,
        factory: Callable[[], logging.Formatter],
    ) -> "LoggerBuilder":
        self._formatter_factory = factory
        return self

    def file_handler(
        self,
        factory: Callable[[Path, logging.Formatter], logging.Handler],
    ) -> "LoggerBuilder":
        self._file_handler_factory = factory
        return self

    def console_handler(
        self,
        factory: Callable[[logging.Formatter], logging.Handler],
    ) -> "LoggerBuilder":
        self._console_handler_factory = factory
        return self

    def build(self) -> logging.Logger:
        """Return the configured logger, reusing it when already built.

        Returns:
            logging.Logger: Logger with a file handler and, when enabled, a
            console handler.
        """
        logger = logging.getLogger(self._name)
        if logger.handlers:
            return logger
        logger.setLevel(self._level)
        logger.propagate = False

        log_dir = get_project_root() / "logs" / self._subdir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{self._today_stamp()}_{self._prefix}.log"

        fmt = self._formatter_factory()
        logger.addHandler(self._file_handler_factory(log_path, fmt))
        if self._console:
            logger.addHandler(self._console_handler_factory(fmt))
        return logger

    @staticmethod
    def _today_stamp() -> str:
        return date.today().strftime("%Y%m%d")

    @staticmethod
    def _default_formatter() -> logging.Formatter:
        return logging.Formatter(DEFAULT_FORMAT)

    @staticmethod
    def _default_file_handler(
        path: Path,
        fmt: logging.Formatter,
    ) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler

    @staticmethod
    def _default_console_handler(fmt: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler


class Logger:
    """Singleton wrapper delegating to a built ``logging.Logger``."""

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, name: str = "brokerfolio") -> None:
        if self._initialized:
            return
        self.logger = self._builder(name).build()
        self._initialized = True

    def _builder(self, name: str) -> LoggerBuilder:
        return LoggerBuilder().name(name)

    def debug(self, message, *args, **kwargs) -> None:
        self.logger.debug(message, *args, **kwargs)

    def info(self, message, *args, **kwargs) -> None:
        self.logger.info(message, *args, **kwargs)

    def warning(self, message, *args, **kwargs) -> None:
        self.logger.warning(message, *args, **kwargs)

    def error(self, message, *args, **kwargs) -> None:
        self.logger.error(message, *args, **kwargs)

    def critical(self, message, *args, **kwargs) -> None:
        self.logger.critical(message, *args, **kwargs)


class AppLogger(Logger):
    """Application logger writing to ``logs/app``."""

    _instance = None

    def _builder(self, name: str) -> LoggerBuilder:
        return LoggerBuilder().name(name).subdir("app").prefix("app_logs")


def get_app_logger() -> AppLogger:
    """Return the shared application logger."""
    return AppLogger("brokerfolio")


__all__ = ["LoggerBuilder", "Logger", "AppLogger", "get_app_logger"]
