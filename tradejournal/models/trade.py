"""Trade data model."""

from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Trade(BaseModel):
    """Represents a single journaled trade."""

    id: Optional[str] = Field(default=None, description="Backend-assigned identifier")
    pnl_net: float = Field(..., description="Net profit/loss after costs")
    date: date_type = Field(..., description="Trade date")
    symbol: str = Field(..., description="Trading symbol")
    rules_followed: bool = Field(default=False, description="Trade followed the trading rules")
    emotion: Optional[str] = Field(default=None, description="Emotional state tag")

    model_config = {"frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Supabase hands back uuids, SQLite hands back integers
        if value is None:
            return None
        return str(value)

    @field_validator("emotion", mode="before")
    @classmethod
    def _blank_emotion(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None
