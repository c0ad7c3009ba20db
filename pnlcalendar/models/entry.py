"""Entry data model."""

from datetime import date as date_type
from typing import Optional
from pydantic import BaseModel, Field


class Entry(BaseModel):
    """One user's trading result for a single calendar date."""

    id: Optional[int] = Field(default=None, description="Database ID")
    user_id: str = Field(default="default", min_length=1, description="Owning user")
    date: date_type = Field(..., description="Trading date")
    pnl: float = Field(..., allow_inf_nan=False, description="Profit/Loss for the day")
    trades: Optional[int] = Field(
        default=None, ge=0, description="Number of trades (None if not recorded)"
    )

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        """ISO date key (YYYY-MM-DD) used to index entries."""
        return self.date.isoformat()
