"""Individual confluence factor rules.

Each factor is a standalone boolean judgment with fixed thresholds passed in
from ConfluenceSettings. Threshold misses are ordinary False results; none of
these functions raise.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from perpdesk.confluence.models import ConvictionLevel


def _sign(value: Decimal) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def is_momentum_extreme(
    momentum: Decimal,
    oversold: Decimal = Decimal("35"),
    overbought: Decimal = Decimal("65"),
) -> bool:
    """True when momentum is strictly below ``oversold`` or above ``overbought``."""
    return momentum < oversold or momentum > overbought


def is_near_level(
    price: Decimal,
    levels: list[Decimal],
    proximity_pct: Decimal = Decimal("0.02"),
) -> bool:
    """Check whether price sits within ``proximity_pct`` of any level.

    Distance is relative to the level: ``|price - level| / level``.

    Args:
        price: Current market price.
        levels: Support and resistance levels combined.
        proximity_pct: Maximum relative distance (0.02 = 2%), exclusive.

    Returns:
        True if any positive level is close enough. False for no levels.
    """
    return any(
        abs(price - level) / level < proximity_pct for level in levels if level > 0
    )


def has_oi_divergence(
    price_change_pct: Decimal,
    oi_change_pct: Decimal,
    price_change_min: Decimal = Decimal("2"),
    oi_change_min: Decimal = Decimal("5"),
) -> bool:
    """Detect price and open interest moving in opposite directions.

    - Price down + OI up: shorts building (squeeze potential)
    - Price up + OI down: longs closing (dump potential)

    Both legs must clear their significance floor so small opposing moves
    do not count.

    Args:
        price_change_pct: 24h price change in percent.
        oi_change_pct: 24h open interest change in percent.
        price_change_min: Minimum |price change| (exclusive).
        oi_change_min: Minimum |OI change| (exclusive).

    Returns:
        True when signs differ and both magnitudes exceed their floors.
    """
    return (
        _sign(price_change_pct) != _sign(oi_change_pct)
        and abs(price_change_pct) > price_change_min
        and abs(oi_change_pct) > oi_change_min
    )


def is_funding_extreme(
    funding_rate: Decimal, threshold: Decimal = Decimal("0.02")
) -> bool:
    """True when |funding_rate| exceeds ``threshold``.

    The rate must be in the snapshot's per-period units. Passing an
    annualized percentage here would flag almost every market.
    """
    return abs(funding_rate) > threshold


def conviction_for(score: int, high: int = 5, medium: int = 4) -> ConvictionLevel:
    """Map a score to HIGH (>= high), MEDIUM (>= medium) or LOW."""
    if score >= high:
        return ConvictionLevel.HIGH
    if score >= medium:
        return ConvictionLevel.MEDIUM
    return ConvictionLevel.LOW
