"""Month grid layout for the calendar view."""

import calendar
from datetime import date as date_type
from typing import Iterable, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from pnlcalendar.models import CalendarEvent, Entry

DayStatus = Literal["profit", "loss", "flat", "empty"]

# Sunday-first weeks, matching a wall calendar.
_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)


class CalendarDay(BaseModel):
    """A single populated cell of the month grid."""

    day: int = Field(..., ge=1, le=31)
    date: date_type
    entry: Optional[Entry] = None
    events: tuple[CalendarEvent, ...] = ()
    is_today: bool = False

    model_config = {"frozen": True}

    @property
    def status(self) -> DayStatus:
        if self.entry is None:
            return "empty"
        if self.entry.pnl > 0:
            return "profit"
        if self.entry.pnl < 0:
            return "loss"
        return "flat"


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}. Must be between 1 and 12")


def month_bounds(year: int, month: int) -> tuple[date_type, date_type]:
    """Get the first and last day of a calendar month."""
    _check_month(month)
    last_day = calendar.monthrange(year, month)[1]
    return date_type(year, month, 1), date_type(year, month, last_day)


def month_key_range(year: int, month: int) -> tuple[str, str]:
    """Get ISO date keys for the first and last day of a month."""
    start, end = month_bounds(year, month)
    return start.isoformat(), end.isoformat()


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (or back), rolling over years."""
    _check_month(month)
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def build_month_grid(
    year: int,
    month: int,
    entries: Mapping[str, Entry],
    events: Iterable[CalendarEvent] = (),
    today: Optional[date_type] = None,
) -> list[list[Optional[CalendarDay]]]:
    """Lay out a month as weeks of seven cells.

    Cells before the 1st and after the last day of the month are None.

    Args:
        year: Calendar year.
        month: Calendar month (1-12).
        entries: Entries keyed by ISO date.
        events: Events to attach to the days they occur on.
        today: Date to flag as today, if any.

    Returns:
        List of weeks, each a list of 7 cells.
    """
    _check_month(month)
    events = list(events)

    weeks = []
    for week in _CALENDAR.monthdatescalendar(year, month):
        row: list[Optional[CalendarDay]] = []
        for day in week:
            if day.month != month:
                row.append(None)
                continue
            row.append(
                CalendarDay(
                    day=day.day,
                    date=day,
                    entry=entries.get(day.isoformat()),
                    events=tuple(e for e in events if e.occurs_on(day)),
                    is_today=day == today,
                )
            )
        weeks.append(row)
    return weeks
