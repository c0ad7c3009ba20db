"""Derived statistics models.

None of these are persisted; they are recomputed from an entry snapshot
by :mod:`pnlcalendar.engine.aggregation` every time they are needed.
"""

from datetime import date as date_type

from pydantic import BaseModel, Field, computed_field


class MonthlyStats(BaseModel):
    """Aggregate results for the entries of one month."""

    total_pnl: float = Field(default=0.0, description="Sum of daily P&L")
    winning_days: int = Field(default=0, ge=0, description="Days with P&L > 0")
    losing_days: int = Field(default=0, ge=0, description="Days with P&L < 0")
    total_trades: int = Field(default=0, ge=0, description="Sum of recorded trade counts")

    model_config = {"frozen": True}

    @computed_field
    @property
    def trading_days(self) -> int:
        """Days with a non-zero P&L."""
        return self.winning_days + self.losing_days


class GoalProgress(BaseModel):
    """Progress towards a monthly P&L goal."""

    goal: float = Field(..., gt=0, description="Goal amount")
    current: float = Field(..., description="Month-to-date P&L")
    percentage: float = Field(..., ge=0, le=100, description="Clamped progress percentage")
    remaining: float = Field(
        ..., description="Goal minus current; negative once the goal is exceeded"
    )

    model_config = {"frozen": True}

    @property
    def over_goal(self) -> bool:
        return self.remaining <= 0


class SeriesPoint(BaseModel):
    """One day in the cumulative P&L series."""

    date: date_type
    daily_pnl: float
    cumulative_pnl: float

    model_config = {"frozen": True}


class SeriesSummary(BaseModel):
    """Headline figures for a window of the cumulative series."""

    total_pnl: float = 0.0
    win_rate: float = Field(default=0.0, ge=0, le=100)
    best_day: float = 0.0
    worst_day: float = 0.0

    model_config = {"frozen": True}


class CumulativeSeries(BaseModel):
    """Chart-ready series plus its summary."""

    window: str = Field(default="all", description="Window the points were filtered to")
    points: tuple[SeriesPoint, ...] = Field(default=())
    summary: SeriesSummary = Field(default_factory=SeriesSummary)

    model_config = {"frozen": True}
