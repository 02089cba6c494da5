"""Risk-based position sizing with leverage, margin and liquidation checks.

All calculations use Decimal arithmetic exclusively -- no float conversions.

Position sizing flow:
1. Validate inputs (DegenerateInputsError on zero risk or non-positive values)
2. Resolve direction: explicit side, or long when entry > stop
3. risk_amount = account_size * risk_pct / 100
4. position_size = risk_amount / |entry - stop|
5. notional = position_size * entry, margin = notional / leverage
6. Approximate liquidation price from a fixed maintenance margin
7. Attach safety warnings; risky-but-valid inputs never raise
"""

from decimal import Decimal

from perpdesk.config import SizingSettings
from perpdesk.exceptions import DegenerateInputsError
from perpdesk.logging import get_logger
from perpdesk.models import PositionSide
from perpdesk.position.models import PositionRequest, PositionResult

logger = get_logger(__name__)

_HUNDRED = Decimal("100")
_ONE = Decimal("1")


def infer_side(entry_price: Decimal, stop_price: Decimal) -> PositionSide:
    """Long when entry is above the stop, short otherwise."""
    return PositionSide.LONG if entry_price > stop_price else PositionSide.SHORT


def liquidation_price(
    entry_price: Decimal,
    leverage: Decimal,
    side: PositionSide,
    maintenance_margin: Decimal = Decimal("0.03"),
) -> Decimal:
    """Approximate liquidation price under a fixed maintenance margin.

    Formula:
        long:  entry * (1 - 1/leverage + maintenance_margin)
        short: entry * (1 + 1/leverage - maintenance_margin)

    This is an approximation; venues apply tiered margin and fees.
    """
    inverse_leverage = _ONE / leverage
    if side == PositionSide.LONG:
        return entry_price * (_ONE - inverse_leverage + maintenance_margin)
    return entry_price * (_ONE + inverse_leverage - maintenance_margin)


def reward_risk_ratio(
    entry_price: Decimal, stop_price: Decimal, target_price: Decimal
) -> Decimal:
    """R-multiple of a target: |target - entry| / |entry - stop|.

    Raises:
        DegenerateInputsError: If entry == stop.
    """
    risk = abs(entry_price - stop_price)
    if risk == 0:
        raise DegenerateInputsError("Entry and stop are equal: risk per unit is zero")
    return abs(target_price - entry_price) / risk


class PositionSizer:
    """Sizes leveraged positions from a fixed-fraction risk budget.

    Stateless apart from its settings; safe to share across callers.

    Args:
        settings: Sizing settings (maintenance margin, safety floor).
            Defaults to SizingSettings().
    """

    def __init__(self, settings: SizingSettings | None = None) -> None:
        self._settings = settings or SizingSettings()

    def size(
        self,
        entry_price: Decimal,
        stop_price: Decimal,
        risk_pct: Decimal,
        account_size: Decimal,
        leverage: Decimal,
        side: PositionSide | None = None,
    ) -> PositionResult:
        """Size a position so that hitting the stop loses ``risk_pct`` of the account.

        Args:
            entry_price: Planned entry price.
            stop_price: Stop-loss price.
            risk_pct: Percent of account to risk (1 = 1%).
            account_size: Account equity in quote currency.
            leverage: Leverage multiplier (10 = 10x).
            side: Explicit direction. None infers long when entry > stop.

        Returns:
            PositionResult with safety flag and warnings.

        Raises:
            DegenerateInputsError: If entry == stop, any parameter is <= 0 or non-finite,
                or an explicit side contradicts the stop placement.
        """
        return self.size_request(
            PositionRequest(
                entry_price=entry_price,
                stop_price=stop_price,
                risk_pct=risk_pct,
                account_size=account_size,
                leverage=leverage,
                side=side,
            )
        )

    def size_request(self, request: PositionRequest) -> PositionResult:
        """Size a position from a PositionRequest. See ``size``."""
        side = self._validate(request)

        entry = request.entry_price
        risk_amount = request.account_size * request.risk_pct / _HUNDRED
        risk_per_unit = abs(entry - request.stop_price)
        position_size = risk_amount / risk_per_unit
        notional_value = position_size * entry
        margin_required = notional_value / request.leverage

        liq_price = liquidation_price(
            entry, request.leverage, side, self._settings.maintenance_margin
        )
        liq_distance_pct = abs(liq_price - entry) / entry * _HUNDRED

        min_distance = self._settings.min_liquidation_distance_pct
        warnings: list[str] = []
        if liq_distance_pct < min_distance:
            warnings.append(f"Liquidation price too close (< {min_distance}%)")
        if margin_required > request.account_size:
            warnings.append("Insufficient account balance")

        result = PositionResult(
            side=side,
            position_size=position_size,
            notional_value=notional_value,
            margin_required=margin_required,
            liquidation_price=liq_price,
            liquidation_distance_pct=liq_distance_pct,
            risk_amount=risk_amount,
            risk_per_unit=risk_per_unit,
            is_safe=not warnings,
            warnings=warnings,
        )

        logger.debug(
            "position_sized",
            side=side.value,
            position_size=str(position_size),
            notional_value=str(notional_value),
            margin_required=str(margin_required),
            liquidation_price=str(liq_price),
            liquidation_distance_pct=str(liq_distance_pct),
        )
        if not result.is_safe:
            logger.warning("position_unsafe", side=side.value, warnings=warnings)

        return result

    def _validate(self, request: PositionRequest) -> PositionSide:
        """Reject degenerate inputs and resolve the position side."""
        named = {
            "entry_price": request.entry_price,
            "stop_price": request.stop_price,
            "risk_pct": request.risk_pct,
            "account_size": request.account_size,
            "leverage": request.leverage,
        }
        for name, value in named.items():
            # NaN cannot be ordered; check before comparing.
            if not value.is_finite():
                raise DegenerateInputsError(f"{name} must be finite, got {value}")
            if value <= 0:
                raise DegenerateInputsError(f"{name} must be positive, got {value}")

        if request.entry_price == request.stop_price:
            raise DegenerateInputsError("Entry and stop are equal: risk per unit is zero")

        inferred = infer_side(request.entry_price, request.stop_price)
        if request.side is not None and request.side != inferred:
            raise DegenerateInputsError(
                f"Stop {request.stop_price} is on the wrong side of entry "
                f"{request.entry_price} for a {request.side.value} position"
            )
        return inferred
