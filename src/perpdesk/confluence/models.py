"""Confluence score data models.

CRITICAL: All indicator and rate values use Decimal. Never use float.
"""

from dataclasses import astuple, dataclass, fields
from decimal import Decimal
from enum import Enum

from perpdesk.indicators.models import GapZone, ImbalanceBlock


class ConvictionLevel(str, Enum):
    """Coarse setup-quality tier derived from the score."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class ConfluenceFactors:
    """Six independently computed signals, equally weighted."""

    momentum_extreme: bool
    near_level: bool
    oi_divergence: bool
    gap_present: bool
    block_present: bool
    funding_extreme: bool

    def count(self) -> int:
        """Number of factors that are True."""
        return sum(1 for flag in astuple(self) if flag)

    def as_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ConfluenceDetails:
    """Indicator values behind the factors. Explanatory only, never scored."""

    momentum: Decimal
    momentum_sufficient: bool  # False -> momentum is the 50 sentinel
    support_levels: list[Decimal]
    resistance_levels: list[Decimal]
    gap_zones: list[GapZone]
    imbalance_blocks: list[ImbalanceBlock]
    funding_rate: Decimal


@dataclass(frozen=True)
class ConfluenceResult:
    """Score (0-6) with its factor breakdown and supporting details.

    ``score`` always equals ``factors.count()``; construct through
    ``ConfluenceResult.from_factors`` to keep it that way.
    """

    score: int
    factors: ConfluenceFactors
    details: ConfluenceDetails
    conviction: ConvictionLevel

    @classmethod
    def from_factors(
        cls,
        factors: ConfluenceFactors,
        details: ConfluenceDetails,
        conviction: ConvictionLevel,
    ) -> "ConfluenceResult":
        return cls(
            score=factors.count(),
            factors=factors,
            details=details,
            conviction=conviction,
        )
