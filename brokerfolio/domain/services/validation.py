"""Domain validation helpers."""

from logging import Logger

from brokerfolio.domain.models import RawPosition


def validate_position(position: RawPosition, logger: Logger) -> None:
    """Warn when a position looks unusual without rejecting it.

    Args:
        position: Position record from the broker.
        logger: Logger used for warnings.
    """
    if position.quantity < 0:
        logger.warning(
            f"Short position for {position.ticker}: {position.quantity}"
        )
    if position.current_price.is_zero():
        logger.warning(
            f"Current price is zero for {position.ticker}; "
            "its value counts as nothing"
        )


__all__ = ["validate_position"]
