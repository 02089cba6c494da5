"""Fair value gap detection over a sliding three-candle window.

A gap exists when the candles either side of a middle candle do not overlap:
- bullish: prev.high < next.low, zone [prev.high, next.low]
- bearish: prev.low > next.high, zone [next.high, prev.low]

Strict inequalities guarantee every zone has top > bottom.
"""

from perpdesk.indicators.models import GapZone
from perpdesk.models import Candle


def find_gaps(candles: list[Candle], max_zones: int = 5) -> list[GapZone]:
    """Return the most recent unfilled gap zones.

    Args:
        candles: Candle series, oldest first.
        max_zones: Maximum number of zones returned.

    Returns:
        Up to ``max_zones`` GapZone objects, the last ones discovered, in
        discovery order.
    """
    zones: list[GapZone] = []

    for i in range(1, len(candles) - 1):
        prev = candles[i - 1]
        nxt = candles[i + 1]

        if prev.high < nxt.low:
            zones.append(GapZone(top=nxt.low, bottom=prev.high))

        if prev.low > nxt.high:
            zones.append(GapZone(top=prev.low, bottom=nxt.high))

    if max_zones <= 0:
        return []
    return zones[-max_zones:]
