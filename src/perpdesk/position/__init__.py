"""Leveraged position sizing, margin and liquidation risk."""

from perpdesk.position.models import PositionRequest, PositionResult
from perpdesk.position.sizing import (
    PositionSizer,
    infer_side,
    liquidation_price,
    reward_risk_ratio,
)

__all__ = [
    "PositionRequest",
    "PositionResult",
    "PositionSizer",
    "infer_side",
    "liquidation_price",
    "reward_risk_ratio",
]
