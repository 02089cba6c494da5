"""Conversion of exchange kline rows into validated Candle series.

Exchange REST APIs return klines as positional arrays:
    [open_time_ms, "open", "high", "low", "close", "volume", close_time, ...]

Prices arrive as strings and are converted with Decimal(str(...)) so no
float rounding leaks in. Extra trailing fields are ignored.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from perpdesk.exceptions import DataIntegrityError
from perpdesk.models import Candle
from perpdesk.validation import validate_series

#: Minimum fields per row: open time, O, H, L, C, volume.
_MIN_FIELDS = 6


def parse_kline(row: list[Any] | tuple[Any, ...], index: int | None = None) -> Candle:
    """Convert one kline row to a Candle without cross-candle checks.

    Raises:
        DataIntegrityError: If the row is too short or a field is not numeric.
    """
    if len(row) < _MIN_FIELDS:
        raise DataIntegrityError(
            f"Kline row has {len(row)} fields, expected at least {_MIN_FIELDS}",
            index=index,
        )
    try:
        return Candle(
            timestamp_ms=int(row[0]),
            open=Decimal(str(row[1])),
            high=Decimal(str(row[2])),
            low=Decimal(str(row[3])),
            close=Decimal(str(row[4])),
            volume=Decimal(str(row[5])),
        )
    except (InvalidOperation, TypeError, ValueError) as e:
        raise DataIntegrityError(f"Unparseable kline row: {row!r}", index=index) from e


def parse_klines(rows: list[list[Any]]) -> list[Candle]:
    """Convert kline rows to a validated candle series.

    Args:
        rows: Kline rows in ascending open-time order.

    Returns:
        Candle list in the same order.

    Raises:
        DataIntegrityError: If no rows were returned, a row is malformed,
            or the resulting series fails ``validate_series``.
    """
    if not rows:
        raise DataIntegrityError("No candles returned by the provider")

    candles = [parse_kline(row, index=i) for i, row in enumerate(rows)]
    validate_series(candles)
    return candles
