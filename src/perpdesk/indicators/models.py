"""Indicator output models.

CRITICAL: All price and indicator values use Decimal. Never use float.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class BlockKind(str, Enum):
    """Which side of the book an imbalance block represents."""

    DEMAND = "demand"
    SUPPLY = "supply"


@dataclass(frozen=True)
class MomentumReading:
    """Momentum index value plus whether it came from enough data.

    ``sufficient_data`` is False when the value is the neutral sentinel
    returned for short series; such a 50 carries no information, unlike a
    genuine midpoint reading.
    """

    value: Decimal
    sufficient_data: bool


@dataclass(frozen=True)
class GapZone:
    """Unfilled price interval left by a fast three-candle move. top > bottom."""

    top: Decimal
    bottom: Decimal


@dataclass(frozen=True)
class ImbalanceBlock:
    """Candle with outsized range, marking concentrated order flow."""

    price: Decimal
    kind: BlockKind
