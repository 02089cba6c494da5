"""Position sizing request/result models.

CRITICAL: All monetary values use Decimal. Never use float for prices,
quantities, or margin.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from perpdesk.models import PositionSide


@dataclass(frozen=True)
class PositionRequest:
    """Price levels and account parameters for one sizing call.

    All numeric fields must be strictly positive and entry != stop; the
    sizer enforces this. ``side`` None means "infer from entry vs stop".
    """

    entry_price: Decimal
    stop_price: Decimal
    risk_pct: Decimal  # 1 = 1% of account
    account_size: Decimal
    leverage: Decimal
    side: PositionSide | None = None


@dataclass(frozen=True)
class PositionResult:
    """Sizing, margin and liquidation figures for a leveraged position.

    ``warnings`` lists each violated safety condition in check order; it is
    empty exactly when ``is_safe`` is True.
    """

    side: PositionSide
    position_size: Decimal  # base units
    notional_value: Decimal
    margin_required: Decimal
    liquidation_price: Decimal
    liquidation_distance_pct: Decimal
    risk_amount: Decimal  # quote currency
    risk_per_unit: Decimal
    is_safe: bool
    warnings: list[str] = field(default_factory=list)
