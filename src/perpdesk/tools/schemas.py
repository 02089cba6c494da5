"""Input schemas for assistant tool calls.

Tool inputs arrive as camelCase JSON from the conversational model; these
models validate them and expose snake_case attributes.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from perpdesk.models import PositionSide

Asset = Literal["SOL-PERP", "BTC-PERP"]
Interval = Literal["1h", "4h", "1d"]


class FetchMarketDataInput(BaseModel):
    asset: Asset

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CalculateConfluenceInput(BaseModel):
    asset: Asset
    interval: Interval = "4h"

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CalculatePositionSizeInput(BaseModel):
    asset: Asset
    entry_price: Decimal = Field(alias="entryPrice", gt=0)
    stop_loss: Decimal = Field(alias="stopLoss", gt=0)
    target: Optional[Decimal] = Field(default=None, gt=0)
    account_size: Optional[Decimal] = Field(default=None, alias="accountSize", gt=0)
    risk_percent: Optional[Decimal] = Field(default=None, alias="riskPercent", gt=0)
    leverage: Optional[Decimal] = Field(default=None, gt=0)
    direction: Optional[PositionSide] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
