"""Shared test fixtures for the analytics engine."""

from decimal import Decimal

import pytest

from perpdesk.config import AppSettings, ConfluenceSettings, IndicatorSettings, SizingSettings
from perpdesk.models import MarketSnapshot


@pytest.fixture
def app_settings() -> AppSettings:
    """Return AppSettings with default thresholds and DEBUG logging."""
    return AppSettings(
        log_level="DEBUG",
        indicators=IndicatorSettings(),
        confluence=ConfluenceSettings(),
        sizing=SizingSettings(),
    )


@pytest.fixture
def market_snapshot() -> MarketSnapshot:
    """Quiet SOL-PERP snapshot: no OI divergence, non-extreme funding."""
    return MarketSnapshot(
        asset="SOL-PERP",
        price=Decimal("138.5"),
        price_change_24h_pct=Decimal("2.5"),
        volume_24h=Decimal("50000000"),
        open_interest=Decimal("100000"),
        oi_change_24h_pct=Decimal("-3.2"),
        funding_rate=Decimal("0.015"),
        funding_rate_annualized=Decimal("5.475"),
        next_funding_time="2025-10-27T00:00:00Z",
        last_update="2025-10-26T22:00:00Z",
    )
