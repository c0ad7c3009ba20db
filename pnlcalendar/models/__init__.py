"""Data models for pnlcalendar."""

from pnlcalendar.models.entry import Entry
from pnlcalendar.models.goal import MonthlyGoal
from pnlcalendar.models.event import CalendarEvent, EventType, EVENT_TYPE_COLORS
from pnlcalendar.models.stats import (
    CumulativeSeries,
    GoalProgress,
    MonthlyStats,
    SeriesPoint,
    SeriesSummary,
)

__all__ = [
    "Entry",
    "MonthlyGoal",
    "CalendarEvent",
    "EventType",
    "EVENT_TYPE_COLORS",
    "MonthlyStats",
    "GoalProgress",
    "SeriesPoint",
    "SeriesSummary",
    "CumulativeSeries",
]
