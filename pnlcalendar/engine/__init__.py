"""Aggregation engine for pnlcalendar."""

from pnlcalendar.engine.aggregation import (
    WINDOW_DAYS,
    build_cumulative_series,
    compute_goal_progress,
    compute_monthly_stats,
)
from pnlcalendar.engine.calendar_grid import (
    CalendarDay,
    build_month_grid,
    month_bounds,
    month_key_range,
    shift_month,
)

__all__ = [
    "WINDOW_DAYS",
    "compute_monthly_stats",
    "compute_goal_progress",
    "build_cumulative_series",
    "CalendarDay",
    "build_month_grid",
    "month_bounds",
    "month_key_range",
    "shift_month",
]
