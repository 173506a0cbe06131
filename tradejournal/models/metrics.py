"""Aggregated metric models."""

from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field


class TradeMetrics(BaseModel):
    """Summary statistics over a trade collection."""

    total_trades: int = Field(..., ge=0, description="Number of trades")
    pnl_total: float = Field(..., description="Sum of net P&L")
    win_rate: float = Field(..., ge=0, le=100, description="Win rate percentage")
    rule_compliance_rate: float = Field(
        ..., ge=0, le=100, description="Rule compliance percentage"
    )
    variant: Literal["score", "emotion"] = Field(..., description="Variant output computed")
    trade_score: Optional[int] = Field(default=None, description="Heuristic trade score")
    most_frequent_emotion: Optional[str] = Field(
        default=None, description="Most frequent emotion tag"
    )

    model_config = {"frozen": True}


class DailyPnL(BaseModel):
    """P&L aggregated over one calendar day."""

    date: date_type = Field(..., description="Calendar date")
    pnl: float = Field(..., description="Total P&L for the day")
    trades_count: int = Field(..., ge=0, description="Number of trades")

    model_config = {"frozen": True}
