"""Boundary protocol for the market-data collaborators.

Implementations (exchange REST clients, on-chain SDK wrappers, caches) live
outside this package. The engine only needs these two calls.
"""

from typing import Protocol

from perpdesk.models import Candle, MarketSnapshot


class MarketDataProvider(Protocol):
    """Source of market snapshots and candle series for a perpetual asset."""

    async def get_market_data(self, asset: str) -> MarketSnapshot:
        """Return the current snapshot for ``asset`` (e.g. "SOL-PERP")."""
        ...

    async def get_candles(self, asset: str, interval: str, limit: int) -> list[Candle]:
        """Return up to ``limit`` candles of ``interval``, oldest first."""
        ...
