"""CalendarEvent data model.

Events annotate calendar days with news, breaks, milestones and other
notes. An event covers a single day unless ``end_date`` is set.
"""

import calendar
from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, model_validator

EventType = Literal["news", "break", "milestone", "reminder", "market", "custom"]

EVENT_TYPE_COLORS: dict[str, str] = {
    "news": "#3B82F6",
    "break": "#F59E0B",
    "milestone": "#10B981",
    "reminder": "#8B5CF6",
    "market": "#EF4444",
    "custom": "#6B7280",
}

EVENT_TYPE_LABELS: dict[str, str] = {
    "news": "News",
    "break": "Break/Vacation",
    "milestone": "Milestone",
    "reminder": "Reminder",
    "market": "Market Event",
    "custom": "Custom",
}


class CalendarEvent(BaseModel):
    """Represents a user-defined calendar event."""

    id: Optional[int] = Field(default=None, description="Database ID")
    user_id: str = Field(default="default", min_length=1, description="Owning user")
    title: str = Field(..., min_length=1, description="Event title")
    description: Optional[str] = Field(default=None, description="Event details")
    start_date: date = Field(..., description="First day of the event")
    end_date: Optional[date] = Field(
        default=None, description="Last day for multi-day events"
    )
    type: EventType = Field(default="custom", description="Event category")
    all_day: bool = Field(default=True, description="Whether the event spans the whole day")
    color: Optional[str] = Field(
        default=None,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex colour overriding the type default",
    )
    created_at: datetime = Field(
        default_factory=datetime.now, description="Creation timestamp"
    )
    updated_at: datetime = Field(
        default_factory=datetime.now, description="Last modification timestamp"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_range(self) -> "CalendarEvent":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @property
    def last_date(self) -> date:
        return self.end_date or self.start_date

    @property
    def display_color(self) -> str:
        return self.color or EVENT_TYPE_COLORS[self.type]

    def occurs_on(self, day: date) -> bool:
        """Check whether ``day`` falls inside the event's date range."""
        return self.start_date <= day <= self.last_date

    def overlaps_month(self, year: int, month: int) -> bool:
        """Check whether the event touches any day of the given month."""
        month_start = date(year, month, 1)
        month_end = date(year, month, calendar.monthrange(year, month)[1])
        return self.start_date <= month_end and self.last_date >= month_start
