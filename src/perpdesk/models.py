"""Shared data models for the analytics engine.

CRITICAL: All prices, rates and percentages use Decimal. Never use float for
indicator or sizing computations.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class PositionSide(str, Enum):
    """Position direction."""

    LONG = "long"
    SHORT = "short"


@dataclass(frozen=True)
class Candle:
    """A single OHLCV candle.

    A list of candles is a series: insertion order is chronological order
    and timestamps strictly increase. See ``perpdesk.validation``.
    """

    timestamp_ms: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal

    @property
    def price_range(self) -> Decimal:
        return self.high - self.low

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        return self.close < self.open


@dataclass(frozen=True)
class MarketSnapshot:
    """Live market statistics for one perpetual market at one instant."""

    asset: str
    price: Decimal
    price_change_24h_pct: Decimal
    volume_24h: Decimal
    open_interest: Decimal
    oi_change_24h_pct: Decimal
    funding_rate: Decimal  # per funding period, NOT annualized
    funding_rate_annualized: Decimal  # percent per year, display only
    next_funding_time: str  # ISO-8601
    last_update: str  # ISO-8601
