"""Tests for ToolExecutor dispatch, validation and serialization.

The market-data provider is an AsyncMock so no network is involved.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from perpdesk.config import AppSettings, SizingSettings
from perpdesk.models import Candle, MarketSnapshot
from perpdesk.tools import TOOL_DEFINITIONS, ToolExecutor


def _candles(count: int = 30) -> list[Candle]:
    candles = []
    for i in range(count):
        c = Decimal("138") + Decimal(i % 3)
        candles.append(
            Candle(
                timestamp_ms=i * 14_400_000,
                open=c,
                high=c + Decimal("1"),
                low=c - Decimal("1"),
                close=c + Decimal("0.5"),
                volume=Decimal("2500"),
            )
        )
    return candles


@pytest.fixture
def provider(market_snapshot: MarketSnapshot) -> MagicMock:
    mock = MagicMock()
    mock.get_market_data = AsyncMock(return_value=market_snapshot)
    mock.get_candles = AsyncMock(return_value=_candles())
    return mock


@pytest.fixture
def executor(provider: MagicMock) -> ToolExecutor:
    return ToolExecutor(provider)


def _position_input(**overrides: object) -> dict:
    tool_input = {"asset": "SOL-PERP", "entryPrice": 138.5, "stopLoss": 136.5}
    tool_input.update(overrides)
    return tool_input


class TestDispatch:
    def test_definitions_match_handlers(self, executor: ToolExecutor) -> None:
        assert sorted(d["name"] for d in TOOL_DEFINITIONS) == sorted(executor.tool_names)

    @pytest.mark.asyncio
    async def test_unknown_tool(self, executor: ToolExecutor) -> None:
        response = await executor.execute("place_order", {})

        assert response.result is None
        assert response.error == "Unknown tool: place_order"

    @pytest.mark.asyncio
    async def test_invalid_input(self, executor: ToolExecutor) -> None:
        response = await executor.execute("calculate_position_size", {"asset": "SOL-PERP"})

        assert response.result is None
        assert response.error is not None
        assert response.error.startswith("Invalid input for calculate_position_size")

    @pytest.mark.asyncio
    async def test_unsupported_asset(self, executor: ToolExecutor) -> None:
        response = await executor.execute("fetch_market_data", {"asset": "DOGE-PERP"})
        assert response.error is not None

    @pytest.mark.asyncio
    async def test_provider_failure_is_reported(
        self, executor: ToolExecutor, provider: MagicMock
    ) -> None:
        provider.get_market_data.side_effect = RuntimeError("upstream down")

        response = await executor.execute("fetch_market_data", {"asset": "SOL-PERP"})

        assert response.result is None
        assert response.error == "upstream down"


class TestFetchMarketData:
    @pytest.mark.asyncio
    async def test_snapshot_serialized(self, executor: ToolExecutor, provider: MagicMock) -> None:
        response = await executor.execute("fetch_market_data", {"asset": "SOL-PERP"})

        provider.get_market_data.assert_awaited_once_with("SOL-PERP")
        assert response.error is None
        assert response.result is not None
        assert response.result["price"] == "138.5"
        assert response.result["fundingRate"] == "0.015"
        assert response.result["oiChange24h"] == "-3.2"
        assert response.result["nextFundingTime"] == "2025-10-27T00:00:00Z"


class TestCalculateConfluence:
    @pytest.mark.asyncio
    async def test_fetches_default_interval(
        self, executor: ToolExecutor, provider: MagicMock
    ) -> None:
        response = await executor.execute("calculate_confluence", {"asset": "SOL-PERP"})

        provider.get_candles.assert_awaited_once_with("SOL-PERP", "4h", 100)
        assert response.error is None
        result = response.result
        assert result is not None
        assert result["score"] == sum(result["factors"].values())
        assert result["conviction"] in {"HIGH", "MEDIUM", "LOW"}
        assert result["currentPrice"] == "138.5"
        assert isinstance(result["details"]["momentum"], str)
        assert result["details"]["momentumSufficient"] is True

    @pytest.mark.asyncio
    async def test_custom_interval_and_limit(self, provider: MagicMock) -> None:
        executor = ToolExecutor(provider, candle_limit=50)

        await executor.execute("calculate_confluence", {"asset": "BTC-PERP", "interval": "1h"})

        provider.get_candles.assert_awaited_once_with("BTC-PERP", "1h", 50)

    @pytest.mark.asyncio
    async def test_malformed_series_is_an_error(
        self, executor: ToolExecutor, provider: MagicMock
    ) -> None:
        provider.get_candles.return_value = list(reversed(_candles(5)))

        response = await executor.execute("calculate_confluence", {"asset": "SOL-PERP"})

        assert response.result is None
        assert response.error is not None
        assert "ascending" in response.error


class TestCalculatePositionSize:
    @pytest.mark.asyncio
    async def test_defaults_applied(self, executor: ToolExecutor) -> None:
        """50,000 account, 1% risk, 10x leverage."""
        response = await executor.execute(
            "calculate_position_size", _position_input(target=144.5)
        )

        assert response.error is None
        result = response.result
        assert result is not None
        assert result["direction"] == "long"
        assert Decimal(result["positionSize"]) == Decimal("250")
        assert Decimal(result["positionSizeUsd"]) == Decimal("34625")
        assert Decimal(result["marginRequired"]) == Decimal("3462.5")
        assert Decimal(result["riskAmount"]) == Decimal("500")
        assert Decimal(result["liquidationPrice"]) == Decimal("128.805")
        assert result["liquidationDistance"] == "7.00"
        assert result["rrRatio"] == "3.00"
        assert result["leverage"] == "10"
        assert result["isSafe"] is False
        assert result["warnings"] == ["Liquidation price too close (< 8%)"]

    @pytest.mark.asyncio
    async def test_low_reward_risk_warning(self, executor: ToolExecutor) -> None:
        response = await executor.execute(
            "calculate_position_size", _position_input(target=139.5, leverage=5)
        )

        result = response.result
        assert result is not None
        assert result["rrRatio"] == "0.50"
        assert result["warnings"] == ["R:R ratio below 1.5:1 (not recommended)"]
        assert result["isSafe"] is True

    @pytest.mark.asyncio
    async def test_without_target(self, executor: ToolExecutor) -> None:
        response = await executor.execute("calculate_position_size", _position_input())

        result = response.result
        assert result is not None
        assert result["rrRatio"] is None
        assert result["target"] is None

    @pytest.mark.asyncio
    async def test_entry_equals_stop(self, executor: ToolExecutor) -> None:
        response = await executor.execute(
            "calculate_position_size", _position_input(stopLoss=138.5)
        )

        assert response.result is None
        assert response.error == "Entry and stop are equal: risk per unit is zero"

    @pytest.mark.asyncio
    async def test_direction_mismatch(self, executor: ToolExecutor) -> None:
        response = await executor.execute(
            "calculate_position_size", _position_input(direction="short")
        )

        assert response.error is not None
        assert "wrong side" in response.error

    @pytest.mark.asyncio
    async def test_non_positive_leverage_rejected_by_schema(self, executor: ToolExecutor) -> None:
        response = await executor.execute("calculate_position_size", _position_input(leverage=0))

        assert response.error is not None
        assert response.error.startswith("Invalid input")

    @pytest.mark.asyncio
    async def test_injected_settings_defaults(
        self, provider: MagicMock, app_settings: AppSettings
    ) -> None:
        app_settings.sizing = SizingSettings(default_account_size=Decimal("10000"))
        executor = ToolExecutor(provider, app_settings)

        response = await executor.execute("calculate_position_size", _position_input())

        result = response.result
        assert result is not None
        assert Decimal(result["riskAmount"]) == Decimal("100")
        assert Decimal(result["positionSize"]) == Decimal("50")

    @pytest.mark.asyncio
    async def test_warning_uses_unrounded_ratio(self, executor: ToolExecutor) -> None:
        """2.99 / 2 = 1.495 displays as 1.50 but is still below 1.5."""
        response = await executor.execute(
            "calculate_position_size",
            {"asset": "SOL-PERP", "entryPrice": "100", "stopLoss": "98", "target": "102.99"},
        )

        result = response.result
        assert result is not None
        assert result["rrRatio"] == "1.50"
        assert "R:R ratio below 1.5:1 (not recommended)" in result["warnings"]

    @pytest.mark.asyncio
    async def test_ratio_at_threshold_has_no_warning(self, executor: ToolExecutor) -> None:
        response = await executor.execute(
            "calculate_position_size",
            {"asset": "SOL-PERP", "entryPrice": "100", "stopLoss": "98", "target": "103"},
        )

        result = response.result
        assert result is not None
        assert result["rrRatio"] == "1.50"
        assert not any(w.startswith("R:R") for w in result["warnings"])
