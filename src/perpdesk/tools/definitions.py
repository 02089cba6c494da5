"""JSON-schema tool definitions advertised to the conversational model."""

from typing import Any

_ASSET_PROPERTY = {
    "type": "string",
    "enum": ["SOL-PERP", "BTC-PERP"],
}

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "fetch_market_data",
        "description": (
            "Fetch real-time market data for SOL-PERP or BTC-PERP. Returns current "
            "price, 24h change, open interest, funding rate and next funding time."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "asset": {
                    **_ASSET_PROPERTY,
                    "description": "The perpetual futures contract to fetch data for",
                },
            },
            "required": ["asset"],
        },
    },
    {
        "name": "calculate_confluence",
        "description": (
            "Calculate confluence score (0-6) for a trading setup. Checks 6 factors: "
            "momentum extreme, support/resistance proximity, OI divergence, fair value "
            "gaps, imbalance blocks, extreme funding. Returns a detailed breakdown."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "asset": {**_ASSET_PROPERTY, "description": "The asset to analyze"},
                "interval": {
                    "type": "string",
                    "enum": ["1h", "4h", "1d"],
                    "description": "Timeframe for technical analysis (default: 4h)",
                },
            },
            "required": ["asset"],
        },
    },
    {
        "name": "calculate_position_size",
        "description": (
            "Calculate position size from a fixed-percentage risk rule. Returns "
            "position size, notional value, margin required, liquidation price, "
            "R:R ratio and safety warnings."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "asset": {**_ASSET_PROPERTY, "description": "The asset to trade"},
                "entryPrice": {"type": "number", "description": "Desired entry price"},
                "stopLoss": {"type": "number", "description": "Stop loss price"},
                "target": {
                    "type": "number",
                    "description": "Take profit target price (optional)",
                },
                "accountSize": {
                    "type": "number",
                    "description": "Total account size in USD (default: 50000)",
                },
                "riskPercent": {
                    "type": "number",
                    "description": "Risk per trade as percentage (default: 1)",
                },
                "leverage": {
                    "type": "number",
                    "description": "Leverage multiplier (default: 10)",
                },
                "direction": {
                    "type": "string",
                    "enum": ["long", "short"],
                    "description": (
                        "Trade direction (optional). Inferred from entry vs stop "
                        "when omitted."
                    ),
                },
            },
            "required": ["asset", "entryPrice", "stopLoss"],
        },
    },
]
