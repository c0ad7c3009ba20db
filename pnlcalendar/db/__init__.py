"""Persistence layer for pnlcalendar."""

from pnlcalendar.db.store import DataStore

__all__ = ["DataStore"]
