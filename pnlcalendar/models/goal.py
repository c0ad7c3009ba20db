"""MonthlyGoal data model."""

from typing import Optional
from pydantic import BaseModel, Field


class MonthlyGoal(BaseModel):
    """Target P&L for one user for one calendar month."""

    id: Optional[int] = Field(default=None, description="Database ID")
    user_id: str = Field(default="default", min_length=1, description="Owning user")
    year: int = Field(..., ge=1, le=9999, description="Calendar year")
    month: int = Field(..., ge=1, le=12, description="Calendar month (1-12)")
    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Goal amount")

    model_config = {"frozen": True}
