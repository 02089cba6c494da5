"""Support and resistance detection from local price pivots.

Scans the trailing ``lookback`` candles for highs/lows that are the extreme
of a symmetric neighborhood, then collapses levels that sit within a small
relative distance of each other.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal
from typing import Literal

from perpdesk.models import Candle


def find_local_extrema(
    values: list[Decimal],
    kind: Literal["max", "min"],
    window: int = 3,
) -> list[Decimal]:
    """Find values that are the max (or min) of their ``2 * window + 1`` neighborhood.

    Only indices with a full neighborhood on both sides are candidates, so
    the first and last ``window`` values are never pivots.

    Args:
        values: Price values in chronological order.
        kind: "max" for resistance pivots, "min" for support pivots.
        window: Number of neighbors required on each side.

    Returns:
        Pivot values in chronological order (not deduplicated).
    """
    pivots: list[Decimal] = []
    for i in range(window, len(values) - window):
        neighborhood = values[i - window : i + window + 1]
        value = values[i]
        if kind == "max" and value == max(neighborhood):
            pivots.append(value)
        elif kind == "min" and value == min(neighborhood):
            pivots.append(value)
    return pivots


def deduplicate_levels(
    levels: list[Decimal], threshold_pct: Decimal = Decimal("0.01")
) -> list[Decimal]:
    """Collapse clustered levels, keeping the lowest of each cluster.

    Sweeps the levels in ascending order and keeps a level only when its
    relative distance to the last kept level, ``|level - kept| / level``,
    exceeds ``threshold_pct``.

    Args:
        levels: Candidate price levels in any order.
        threshold_pct: Relative distance (0.01 = 1%) below which levels merge.

    Returns:
        Ascending list with no two members within ``threshold_pct`` of each other.
    """
    kept: list[Decimal] = []
    for level in sorted(levels):
        if not kept or abs(level - kept[-1]) / level > threshold_pct:
            kept.append(level)
    return kept


def find_levels(
    candles: list[Candle],
    lookback: int = 20,
    window: int = 3,
    dedup_pct: Decimal = Decimal("0.01"),
) -> tuple[list[Decimal], list[Decimal]]:
    """Detect support and resistance levels in recent price action.

    Args:
        candles: Candle series, oldest first.
        lookback: Number of trailing candles to scan.
        window: Pivot neighborhood half-width.
        dedup_pct: Clustering distance passed to ``deduplicate_levels``.

    Returns:
        Tuple of (supports, resistances). Both empty when the series is
        shorter than ``2 * window + 1`` candles.
    """
    recent = candles[-lookback:] if lookback > 0 else []

    highs = [c.high for c in recent]
    lows = [c.low for c in recent]

    resistances = deduplicate_levels(find_local_extrema(highs, "max", window), dedup_pct)
    supports = deduplicate_levels(find_local_extrema(lows, "min", window), dedup_pct)

    return supports, resistances
