"""Imbalance (order) block detection.

A block is an interior candle whose range exceeds ``range_multiplier`` times
the trailing average range. Bullish candles mark demand at their low,
bearish candles mark supply at their high. Doji candles (close == open)
never produce a block.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from perpdesk.indicators.models import BlockKind, ImbalanceBlock
from perpdesk.models import Candle


def trailing_average_range(candles: list[Candle], index: int, lookback: int = 10) -> Decimal:
    """Average range of the candles preceding ``index``.

    The divisor is always ``lookback``, so early candles with fewer than
    ``lookback`` predecessors get a proportionally smaller average.
    """
    preceding = candles[max(0, index - lookback) : index]
    total = sum((c.price_range for c in preceding), Decimal("0"))
    return total / Decimal(lookback)


def find_blocks(
    candles: list[Candle],
    lookback: int = 10,
    range_multiplier: Decimal = Decimal("1.5"),
    max_blocks: int = 3,
) -> list[ImbalanceBlock]:
    """Return the most recent imbalance blocks.

    The first and last candles are never candidates.

    Args:
        candles: Candle series, oldest first.
        lookback: Candles in the trailing average range.
        range_multiplier: How many average ranges a candle must exceed.
        max_blocks: Maximum number of blocks returned.

    Returns:
        Up to ``max_blocks`` blocks, the last ones discovered, in discovery order.
    """
    blocks: list[ImbalanceBlock] = []

    for i in range(1, len(candles) - 1):
        candle = candles[i]
        threshold = trailing_average_range(candles, i, lookback) * range_multiplier

        if candle.price_range <= threshold:
            continue

        if candle.is_bullish:
            blocks.append(ImbalanceBlock(price=candle.low, kind=BlockKind.DEMAND))
        elif candle.is_bearish:
            blocks.append(ImbalanceBlock(price=candle.high, kind=BlockKind.SUPPLY))

    if max_blocks <= 0:
        return []
    return blocks[-max_blocks:]
