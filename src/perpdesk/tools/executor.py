"""Tool-call execution for the conversational assistant.

ToolExecutor is the seam between the model's tool calls and the engine:
1. Validates the raw tool input with the matching pydantic schema
2. Fetches market data through the injected MarketDataProvider
3. Calls the engine facade (score_confluence / size_position)
4. Serializes the result to JSON-safe primitives (Decimal -> str)

Failures of any kind come back as ToolResponse(error=...) so the
conversation can continue; they are logged, never raised.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import ValidationError

from perpdesk.config import AppSettings, default_settings
from perpdesk.confluence.models import ConfluenceResult
from perpdesk.data.provider import MarketDataProvider
from perpdesk.engine import score_confluence, size_position
from perpdesk.exceptions import EngineError
from perpdesk.logging import get_logger, tool_call_context
from perpdesk.models import MarketSnapshot
from perpdesk.position.sizing import reward_risk_ratio
from perpdesk.tools.schemas import (
    CalculateConfluenceInput,
    CalculatePositionSizeInput,
    FetchMarketDataInput,
)

logger = get_logger(__name__)

_TWO_PLACES = Decimal("0.01")


def _decimal_to_str(obj: Any) -> Any:
    """Recursively convert Decimal values to strings for JSON serialization."""
    if isinstance(obj, Decimal):
        # Fixed-point: quotients such as 5000 / 0.5 carry a positive exponent.
        return format(obj, "f")
    if isinstance(obj, dict):
        return {k: _decimal_to_str(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_decimal_to_str(item) for item in obj]
    return obj


def _round2(value: Decimal) -> Decimal:
    return value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass
class ToolResponse:
    """Result of one tool call: a JSON-safe ``result`` or an ``error`` message."""

    result: dict[str, Any] | None = None
    error: str | None = None


class ToolExecutor:
    """Dispatches assistant tool calls to the analytics engine.

    Args:
        provider: Source of market snapshots and candles.
        settings: Engine settings. Defaults to default_settings().
        candle_limit: Candles requested for confluence analysis.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        settings: AppSettings | None = None,
        candle_limit: int = 100,
    ) -> None:
        self._provider = provider
        self._settings = settings or default_settings()
        self._candle_limit = candle_limit
        self._handlers: dict[str, Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]] = {
            "fetch_market_data": self._fetch_market_data,
            "calculate_confluence": self._calculate_confluence,
            "calculate_position_size": self._calculate_position_size,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    async def execute(self, name: str, tool_input: dict[str, Any]) -> ToolResponse:
        """Run a tool by name.

        Args:
            name: Tool name as advertised in TOOL_DEFINITIONS.
            tool_input: Raw JSON input from the model.

        Returns:
            ToolResponse with either a result dict or an error message.
        """
        handler = self._handlers.get(name)
        if handler is None:
            return ToolResponse(error=f"Unknown tool: {name}")

        with tool_call_context(name):
            try:
                result = await handler(tool_input)
            except ValidationError as e:
                logger.warning("tool_input_invalid", error=str(e))
                return ToolResponse(error=f"Invalid input for {name}: {e}")
            except EngineError as e:
                return ToolResponse(error=str(e))
            except Exception as e:
                # Provider failures are arbitrary; surface them to the model.
                logger.exception("tool_execution_failed", error=str(e))
                return ToolResponse(error=str(e) or type(e).__name__)

        return ToolResponse(result=_decimal_to_str(result))

    # ──────────────────────────────────────────────
    # Handlers
    # ──────────────────────────────────────────────

    async def _fetch_market_data(self, tool_input: dict[str, Any]) -> dict[str, Any]:
        params = FetchMarketDataInput.model_validate(tool_input)
        snapshot = await self._provider.get_market_data(params.asset)
        return _snapshot_payload(snapshot)

    async def _calculate_confluence(self, tool_input: dict[str, Any]) -> dict[str, Any]:
        params = CalculateConfluenceInput.model_validate(tool_input)
        logger.info("calculating_confluence", asset=params.asset, interval=params.interval)

        snapshot = await self._provider.get_market_data(params.asset)
        candles = await self._provider.get_candles(
            params.asset, params.interval, self._candle_limit
        )

        confluence = score_confluence(snapshot, candles, self._settings).unwrap()
        return {
            **_confluence_payload(confluence),
            "currentPrice": snapshot.price,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def _calculate_position_size(self, tool_input: dict[str, Any]) -> dict[str, Any]:
        params = CalculatePositionSizeInput.model_validate(tool_input)
        sizing = self._settings.sizing
        account_size = params.account_size or sizing.default_account_size
        risk_pct = params.risk_percent or sizing.default_risk_pct
        leverage = params.leverage or sizing.default_leverage

        position = size_position(
            entry_price=params.entry_price,
            stop_price=params.stop_loss,
            risk_pct=risk_pct,
            account_size=account_size,
            leverage=leverage,
            side=params.direction,
            settings=self._settings,
        ).unwrap()

        rr_ratio: Decimal | None = None
        warnings = list(position.warnings)
        if params.target is not None:
            raw_ratio = reward_risk_ratio(params.entry_price, params.stop_loss, params.target)
            rr_ratio = _round2(raw_ratio)
            # Threshold applies to the unrounded ratio; 1.495 displays as 1.50.
            if raw_ratio < sizing.min_reward_risk:
                warnings.append(
                    f"R:R ratio below {sizing.min_reward_risk}:1 (not recommended)"
                )

        return {
            "asset": params.asset,
            "direction": position.side.value,
            "positionSize": position.position_size,
            "positionSizeUsd": position.notional_value,
            "marginRequired": position.margin_required,
            "entryPrice": params.entry_price,
            "stopLoss": params.stop_loss,
            "target": params.target,
            "riskAmount": position.risk_amount,
            "rrRatio": rr_ratio,
            "leverage": leverage,
            "liquidationPrice": position.liquidation_price,
            "liquidationDistance": _round2(position.liquidation_distance_pct),
            "isSafe": position.is_safe,
            "warnings": warnings,
        }


def _snapshot_payload(snapshot: MarketSnapshot) -> dict[str, Any]:
    return {
        "asset": snapshot.asset,
        "price": snapshot.price,
        "priceChange24h": snapshot.price_change_24h_pct,
        "volume24h": snapshot.volume_24h,
        "openInterest": snapshot.open_interest,
        "oiChange24h": snapshot.oi_change_24h_pct,
        "fundingRate": snapshot.funding_rate,
        "fundingRateAnnualized": snapshot.funding_rate_annualized,
        "nextFundingTime": snapshot.next_funding_time,
        "timestamp": snapshot.last_update,
    }


def _confluence_payload(confluence: ConfluenceResult) -> dict[str, Any]:
    details = confluence.details
    return {
        "score": confluence.score,
        "conviction": confluence.conviction.value,
        "factors": confluence.factors.as_dict(),
        "details": {
            "momentum": details.momentum,
            "momentumSufficient": details.momentum_sufficient,
            "supportLevels": details.support_levels,
            "resistanceLevels": details.resistance_levels,
            "gapZones": [{"top": z.top, "bottom": z.bottom} for z in details.gap_zones],
            "imbalanceBlocks": [
                {"price": b.price, "type": b.kind.value} for b in details.imbalance_blocks
            ],
            "fundingRate": details.funding_rate,
        },
    }
