"""Data boundary: kline parsing and the market-data provider protocol."""

from perpdesk.data.klines import parse_kline, parse_klines
from perpdesk.data.provider import MarketDataProvider

__all__ = ["MarketDataProvider", "parse_kline", "parse_klines"]
