"""Confluence aggregation.

Turns indicator outputs and a market snapshot into six boolean factors and
an equal-weight 0-6 score.
"""

from perpdesk.confluence.factors import (
    conviction_for,
    has_oi_divergence,
    is_funding_extreme,
    is_momentum_extreme,
    is_near_level,
)
from perpdesk.confluence.models import (
    ConfluenceDetails,
    ConfluenceFactors,
    ConfluenceResult,
    ConvictionLevel,
)
from perpdesk.confluence.scorer import ConfluenceScorer

__all__ = [
    "ConfluenceDetails",
    "ConfluenceFactors",
    "ConfluenceResult",
    "ConfluenceScorer",
    "ConvictionLevel",
    "conviction_for",
    "has_oi_divergence",
    "is_funding_extreme",
    "is_momentum_extreme",
    "is_near_level",
]
