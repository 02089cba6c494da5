"""Public entry points of the analytics engine.

These two functions are what the chat/tool layer and the UI call. They never
raise for engine errors: DataIntegrityError and DegenerateInputsError come
back as a failed Outcome so callers have a single way to branch.
"""

from __future__ import annotations

from decimal import Decimal

from perpdesk.config import AppSettings, default_settings
from perpdesk.confluence.models import ConfluenceResult
from perpdesk.confluence.scorer import ConfluenceScorer
from perpdesk.exceptions import EngineError
from perpdesk.logging import get_logger
from perpdesk.models import Candle, MarketSnapshot, PositionSide
from perpdesk.position.models import PositionResult
from perpdesk.position.sizing import PositionSizer
from perpdesk.results import Failure, Outcome

logger = get_logger(__name__)


def score_confluence(
    snapshot: MarketSnapshot,
    candles: list[Candle],
    settings: AppSettings | None = None,
) -> Outcome[ConfluenceResult]:
    """Score a setup (0-6) from a market snapshot and candle series.

    Args:
        snapshot: Live market statistics for the asset.
        candles: Candle series, oldest first.
        settings: Thresholds to apply. Defaults to default_settings().

    Returns:
        Outcome with a ConfluenceResult, or a DATA_INTEGRITY failure.
    """
    settings = settings or default_settings()
    scorer = ConfluenceScorer(settings.indicators, settings.confluence)
    try:
        return Outcome(value=scorer.score(snapshot, candles))
    except EngineError as e:
        failure = Failure.from_exception(e)
        logger.warning(
            "engine_call_failed",
            operation="score_confluence",
            asset=snapshot.asset,
            kind=failure.kind.value,
            error=failure.message,
        )
        return Outcome(failure=failure)


def size_position(
    entry_price: Decimal,
    stop_price: Decimal,
    risk_pct: Decimal,
    account_size: Decimal,
    leverage: Decimal,
    side: PositionSide | None = None,
    settings: AppSettings | None = None,
) -> Outcome[PositionResult]:
    """Size a leveraged position and assess its liquidation risk.

    Risky inputs still succeed, with ``is_safe`` False and warnings attached.

    Returns:
        Outcome with a PositionResult, or a DEGENERATE_INPUTS failure.
    """
    settings = settings or default_settings()
    sizer = PositionSizer(settings.sizing)
    try:
        return Outcome(
            value=sizer.size(
                entry_price=entry_price,
                stop_price=stop_price,
                risk_pct=risk_pct,
                account_size=account_size,
                leverage=leverage,
                side=side,
            )
        )
    except EngineError as e:
        failure = Failure.from_exception(e)
        logger.warning(
            "engine_call_failed",
            operation="size_position",
            kind=failure.kind.value,
            error=failure.message,
        )
        return Outcome(failure=failure)
