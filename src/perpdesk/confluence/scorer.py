"""Confluence scorer combining candle indicators with a market snapshot.

The ConfluenceScorer is the aggregation layer that:
1. Validates the candle series (DataIntegrityError propagates)
2. Computes every indicator from the series
3. Evaluates the six factors against ConfluenceSettings thresholds
4. Counts true factors into a 0-6 score (no weighting, no partial credit)
5. Logs the factor breakdown at INFO level

Scorers hold only read-only settings, so one instance can serve any number
of concurrent callers.

CRITICAL: All computations use Decimal. Never use float for indicator values.
"""

from __future__ import annotations

from perpdesk.config import ConfluenceSettings, IndicatorSettings
from perpdesk.confluence.factors import (
    conviction_for,
    has_oi_divergence,
    is_funding_extreme,
    is_momentum_extreme,
    is_near_level,
)
from perpdesk.confluence.models import (
    ConfluenceDetails,
    ConfluenceFactors,
    ConfluenceResult,
)
from perpdesk.indicators.blocks import find_blocks
from perpdesk.indicators.gaps import find_gaps
from perpdesk.indicators.levels import find_levels
from perpdesk.indicators.momentum import momentum_reading
from perpdesk.logging import get_logger
from perpdesk.models import Candle, MarketSnapshot
from perpdesk.validation import validate_series

logger = get_logger(__name__)


class ConfluenceScorer:
    """Scores a setup by counting agreeing technical and market signals.

    Args:
        indicator_settings: Lookbacks and limits for the indicators.
            Defaults to IndicatorSettings().
        confluence_settings: Factor thresholds and conviction tiers.
            Defaults to ConfluenceSettings().
    """

    def __init__(
        self,
        indicator_settings: IndicatorSettings | None = None,
        confluence_settings: ConfluenceSettings | None = None,
    ) -> None:
        self._indicators = indicator_settings or IndicatorSettings()
        self._settings = confluence_settings or ConfluenceSettings()

    def score(self, snapshot: MarketSnapshot, candles: list[Candle]) -> ConfluenceResult:
        """Compute the confluence result for one market.

        Args:
            snapshot: Live market statistics (price, OI, funding).
            candles: Candle series, oldest first.

        Returns:
            ConfluenceResult whose score equals the number of true factors.

        Raises:
            DataIntegrityError: If the candle series is malformed.
        """
        validate_series(candles)

        momentum = momentum_reading(candles, self._indicators.momentum_period)
        supports, resistances = find_levels(
            candles,
            lookback=self._indicators.level_lookback,
            window=self._indicators.level_window,
            dedup_pct=self._indicators.level_dedup_pct,
        )
        gaps = find_gaps(candles, max_zones=self._indicators.gap_max_zones)
        blocks = find_blocks(
            candles,
            lookback=self._indicators.block_lookback,
            range_multiplier=self._indicators.block_range_multiplier,
            max_blocks=self._indicators.block_max_count,
        )

        factors = ConfluenceFactors(
            momentum_extreme=is_momentum_extreme(
                momentum.value,
                oversold=self._settings.momentum_oversold,
                overbought=self._settings.momentum_overbought,
            ),
            near_level=is_near_level(
                snapshot.price,
                [*supports, *resistances],
                proximity_pct=self._settings.level_proximity_pct,
            ),
            oi_divergence=has_oi_divergence(
                snapshot.price_change_24h_pct,
                snapshot.oi_change_24h_pct,
                price_change_min=self._settings.oi_price_change_min,
                oi_change_min=self._settings.oi_change_min,
            ),
            gap_present=len(gaps) > 0,
            block_present=len(blocks) > 0,
            funding_extreme=is_funding_extreme(
                snapshot.funding_rate, threshold=self._settings.funding_extreme_rate
            ),
        )

        details = ConfluenceDetails(
            momentum=momentum.value,
            momentum_sufficient=momentum.sufficient_data,
            support_levels=supports,
            resistance_levels=resistances,
            gap_zones=gaps,
            imbalance_blocks=blocks,
            funding_rate=snapshot.funding_rate,
        )

        result = ConfluenceResult.from_factors(
            factors,
            details,
            conviction_for(
                factors.count(),
                high=self._settings.high_conviction_score,
                medium=self._settings.medium_conviction_score,
            ),
        )

        logger.info(
            "confluence_scored",
            asset=snapshot.asset,
            candles=len(candles),
            score=result.score,
            conviction=result.conviction.value,
            momentum=str(momentum.value),
            momentum_sufficient=momentum.sufficient_data,
            **factors.as_dict(),
        )

        return result
