"""Tests for imbalance block detection.

Baseline candles are dojis (open == close) with range 1 so only the
deliberately large candles can qualify.
"""

from decimal import Decimal

from perpdesk.indicators.blocks import find_blocks, trailing_average_range
from perpdesk.indicators.models import BlockKind, ImbalanceBlock
from perpdesk.models import Candle


def _doji(ts: int, base: str = "100") -> Candle:
    b = Decimal(base)
    return Candle(
        timestamp_ms=ts,
        open=b + Decimal("0.5"),
        high=b + Decimal("1"),
        low=b,
        close=b + Decimal("0.5"),
        volume=Decimal("1"),
    )


def _big(ts: int, low: str, bullish: bool = True, size: str = "3") -> Candle:
    lo = Decimal(low)
    hi = lo + Decimal(size)
    open_, close = (lo, hi) if bullish else (hi, lo)
    return Candle(timestamp_ms=ts, open=open_, high=hi, low=lo, close=close, volume=Decimal("1"))


class TestTrailingAverageRange:
    """Fixed-divisor trailing average."""

    def test_full_window(self) -> None:
        candles = [_doji(i) for i in range(12)]
        assert trailing_average_range(candles, 11, lookback=10) == Decimal("1")

    def test_partial_window_uses_fixed_divisor(self) -> None:
        """Two predecessors of range 1 average to 2/10, not 1."""
        candles = [_doji(i) for i in range(5)]
        assert trailing_average_range(candles, 2, lookback=10) == Decimal("0.2")


class TestBlockDetection:
    """Demand and supply blocks."""

    def test_large_bullish_candle_is_demand(self) -> None:
        candles = [_doji(i) for i in range(11)] + [_big(11, "100"), _doji(12)]
        assert find_blocks(candles) == [ImbalanceBlock(price=Decimal("100"), kind=BlockKind.DEMAND)]

    def test_large_bearish_candle_is_supply(self) -> None:
        candles = [_doji(i) for i in range(11)] + [_big(11, "100", bullish=False), _doji(12)]
        assert find_blocks(candles) == [ImbalanceBlock(price=Decimal("103"), kind=BlockKind.SUPPLY)]

    def test_range_at_threshold_is_not_a_block(self) -> None:
        """Range must strictly exceed 1.5x the average."""
        candles = [_doji(i) for i in range(11)] + [_big(11, "100", size="1.5"), _doji(12)]
        assert find_blocks(candles) == []

    def test_last_candle_never_qualifies(self) -> None:
        candles = [_doji(i) for i in range(11)] + [_big(11, "100")]
        assert find_blocks(candles) == []

    def test_doji_never_qualifies(self) -> None:
        wide_doji = Candle(
            timestamp_ms=11,
            open=Decimal("102"),
            high=Decimal("105"),
            low=Decimal("99"),
            close=Decimal("102"),
            volume=Decimal("1"),
        )
        candles = [_doji(i) for i in range(11)] + [wide_doji, _doji(12)]
        assert find_blocks(candles) == []

    def test_early_candle_flagged_against_small_average(self) -> None:
        """At index 1 the average is range/10, so a normal bullish candle qualifies."""
        candles = [_doji(0), _big(1, "100", size="1"), _doji(2)]
        assert find_blocks(candles) == [ImbalanceBlock(price=Decimal("100"), kind=BlockKind.DEMAND)]


class TestBlockLimits:
    """Most-recent-three truncation."""

    def test_returns_last_three(self) -> None:
        candles = [_doji(i) for i in range(20)]
        for i in (12, 14, 16, 18):
            candles[i] = _big(i, str(100 + i))
        blocks = find_blocks(candles)
        assert len(blocks) == 3
        assert [b.price for b in blocks] == [Decimal("114"), Decimal("116"), Decimal("118")]
        assert all(b.kind == BlockKind.DEMAND for b in blocks)

    def test_zero_limit(self) -> None:
        candles = [_doji(i) for i in range(11)] + [_big(11, "100"), _doji(12)]
        assert find_blocks(candles, max_blocks=0) == []
