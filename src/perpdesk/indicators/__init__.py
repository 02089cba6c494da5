"""Candle indicator library.

Leaf computations that depend only on a candle series: the momentum index,
support/resistance levels, fair value gaps and imbalance blocks.
"""

from perpdesk.indicators.blocks import find_blocks, trailing_average_range
from perpdesk.indicators.gaps import find_gaps
from perpdesk.indicators.levels import deduplicate_levels, find_levels, find_local_extrema
from perpdesk.indicators.models import BlockKind, GapZone, ImbalanceBlock, MomentumReading
from perpdesk.indicators.momentum import (
    INSUFFICIENT_DATA_SENTINEL,
    compute_momentum,
    momentum_reading,
)

__all__ = [
    "INSUFFICIENT_DATA_SENTINEL",
    "BlockKind",
    "GapZone",
    "ImbalanceBlock",
    "MomentumReading",
    "compute_momentum",
    "deduplicate_levels",
    "find_blocks",
    "find_gaps",
    "find_levels",
    "find_local_extrema",
    "momentum_reading",
    "trailing_average_range",
]
