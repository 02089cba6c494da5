"""Configuration system using pydantic-settings with environment variable loading.

Every threshold the engine applies lives here. Defaults reproduce the fixed
rule set exactly; tuning happens through environment variables, never by
editing algorithm code.
"""

import functools
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class IndicatorSettings(BaseSettings):
    """Lookbacks and limits for the candle indicators.

    All fields configurable via INDICATOR_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="INDICATOR_")

    # Momentum index
    momentum_period: int = 14

    # Support/resistance
    level_lookback: int = 20  # trailing candles scanned for pivots
    level_window: int = 3  # candles either side of a pivot
    level_dedup_pct: Decimal = Decimal("0.01")  # 1% clustering distance

    # Gaps
    gap_max_zones: int = 5

    # Imbalance blocks
    block_lookback: int = 10  # candles in the trailing average range
    block_range_multiplier: Decimal = Decimal("1.5")
    block_max_count: int = 3


class ConfluenceSettings(BaseSettings):
    """Factor thresholds for the confluence score.

    All fields configurable via CONFLUENCE_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="CONFLUENCE_")

    momentum_oversold: Decimal = Decimal("35")
    momentum_overbought: Decimal = Decimal("65")
    level_proximity_pct: Decimal = Decimal("0.02")  # 2% from a level
    oi_price_change_min: Decimal = Decimal("2")  # |24h price change %| floor
    oi_change_min: Decimal = Decimal("5")  # |24h OI change %| floor
    funding_extreme_rate: Decimal = Decimal("0.02")  # per-period, NOT annualized

    # Conviction tiers
    high_conviction_score: int = 5
    medium_conviction_score: int = 4


class SizingSettings(BaseSettings):
    """Position sizing, liquidation and safety parameters.

    All fields configurable via SIZING_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="SIZING_")

    maintenance_margin: Decimal = Decimal("0.03")  # 3% approximation
    min_liquidation_distance_pct: Decimal = Decimal("8")
    min_reward_risk: Decimal = Decimal("1.5")

    # Tool-call defaults when the caller omits account parameters
    default_account_size: Decimal = Decimal("50000")
    default_risk_pct: Decimal = Decimal("1")
    default_leverage: Decimal = Decimal("10")


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    indicators: IndicatorSettings = IndicatorSettings()
    confluence: ConfluenceSettings = ConfluenceSettings()
    sizing: SizingSettings = SizingSettings()


@functools.cache
def default_settings() -> AppSettings:
    """Return the process-wide AppSettings, loaded from the environment once.

    Engine calls without explicit settings share this instance, so the
    per-call path never touches ``.env`` or ``os.environ``.
    """
    return AppSettings()
