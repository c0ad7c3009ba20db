"""pnlcalendar - a calendar-style trading journal for daily P&L."""

__version__ = "0.1.0"
