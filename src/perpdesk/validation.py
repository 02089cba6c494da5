"""Candle series integrity checks.

Upstream providers are expected to deliver clean series; the engine
re-validates and rejects on the first violation rather than repairing data.
"""

from decimal import Decimal

from perpdesk.exceptions import DataIntegrityError
from perpdesk.models import Candle


def validate_candle(candle: Candle, index: int | None = None) -> None:
    """Check a single candle's price positivity and OHLC consistency.

    Args:
        candle: The candle to check.
        index: Position in its series, reported on failure.

    Raises:
        DataIntegrityError: On the first violated constraint.
    """
    prices = (candle.open, candle.high, candle.low, candle.close)
    if any(p <= Decimal("0") for p in prices):
        raise DataIntegrityError(
            f"Invalid candle at {candle.timestamp_ms}: prices must be positive",
            index=index,
        )
    if candle.volume < Decimal("0"):
        raise DataIntegrityError(
            f"Invalid candle at {candle.timestamp_ms}: negative volume ({candle.volume})",
            index=index,
        )
    if candle.high < candle.open or candle.high < candle.close:
        raise DataIntegrityError(
            f"Invalid candle at {candle.timestamp_ms}: "
            f"high ({candle.high}) < open/close",
            index=index,
        )
    if candle.low > candle.open or candle.low > candle.close:
        raise DataIntegrityError(
            f"Invalid candle at {candle.timestamp_ms}: "
            f"low ({candle.low}) > open/close",
            index=index,
        )


def validate_series(candles: list[Candle]) -> None:
    """Check that a series is chronologically ordered and OHLC-consistent.

    An empty series is valid here; indicators degrade on short input.

    Raises:
        DataIntegrityError: On the first violation, with its index.
    """
    previous: Candle | None = None
    for i, candle in enumerate(candles):
        if previous is not None and candle.timestamp_ms <= previous.timestamp_ms:
            raise DataIntegrityError(
                f"Candles are not in ascending timestamp order at index {i} "
                f"({candle.timestamp_ms} <= {previous.timestamp_ms})",
                index=i,
            )
        validate_candle(candle, index=i)
        previous = candle
