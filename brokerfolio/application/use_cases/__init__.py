"""Application use cases package."""

from .build_history import BuildHistoryUseCase, HistoryReport
from .build_portfolio import BuildPortfolioUseCase

__all__ = [
    "BuildHistoryUseCase",
    "BuildPortfolioUseCase",
    "HistoryReport",
]
