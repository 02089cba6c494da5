"""RSI-style momentum index over candle closes.

Uses simple (not exponential) averages of close-to-close gains and losses
over the trailing ``period`` candles.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from perpdesk.exceptions import DegenerateInputsError
from perpdesk.indicators.models import MomentumReading
from perpdesk.models import Candle

#: Returned when the series is too short. Non-informative: it does NOT mean
#: the market is balanced, only that there were fewer than period+1 closes.
INSUFFICIENT_DATA_SENTINEL = Decimal("50")

_HUNDRED = Decimal("100")


def momentum_reading(candles: list[Candle], period: int = 14) -> MomentumReading:
    """Compute the momentum index and flag whether it is informative.

    Formula:
        avg_gain = sum(positive deltas) / period
        avg_loss = sum(|negative deltas|) / period
        value = 100 - 100 / (1 + avg_gain / avg_loss)

    Edge cases (policy, not errors):
    - fewer than ``period + 1`` candles -> sentinel 50, sufficient_data=False
    - avg_loss == 0 -> 100 (includes a perfectly flat series)

    Args:
        candles: Candle series, oldest first.
        period: Number of trailing deltas to average.

    Returns:
        MomentumReading with value in [0, 100].

    Raises:
        DegenerateInputsError: If period < 1.
    """
    if period < 1:
        raise DegenerateInputsError(f"Momentum period must be >= 1, got {period}")

    if len(candles) < period + 1:
        return MomentumReading(value=INSUFFICIENT_DATA_SENTINEL, sufficient_data=False)

    gains = Decimal("0")
    losses = Decimal("0")
    for i in range(len(candles) - period, len(candles)):
        change = candles[i].close - candles[i - 1].close
        if change > 0:
            gains += change
        else:
            losses += -change

    avg_gain = gains / period
    avg_loss = losses / period

    if avg_loss == 0:
        return MomentumReading(value=_HUNDRED, sufficient_data=True)

    rs = avg_gain / avg_loss
    return MomentumReading(value=_HUNDRED - _HUNDRED / (1 + rs), sufficient_data=True)


def compute_momentum(candles: list[Candle], period: int = 14) -> Decimal:
    """Return just the momentum value (50 when data is insufficient)."""
    return momentum_reading(candles, period).value
