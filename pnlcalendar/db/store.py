"""SQLite data store for pnlcalendar."""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from pnlcalendar.engine.calendar_grid import month_key_range
from pnlcalendar.models import CalendarEvent, Entry, MonthlyGoal

logger = logging.getLogger(__name__)

_EVENT_COLUMNS = (
    "id, user_id, title, description, start_date, end_date, type, "
    "all_day, color, created_at, updated_at"
)

_EVENT_FIELDS = {
    "title",
    "description",
    "start_date",
    "end_date",
    "type",
    "all_day",
    "color",
}


class DataStore:
    """SQLite-based store for entries, monthly goals and events."""

    REQUIRED_TABLES = [
        "entries",
        "monthly_goals",
        "events",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Daily P&L entries
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    pnl REAL NOT NULL,
                    trades INTEGER,
                    UNIQUE(user_id, date)
                )
            """)

            # Monthly goals
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS monthly_goals (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    year INTEGER NOT NULL,
                    month INTEGER NOT NULL,
                    goal REAL NOT NULL,
                    UNIQUE(user_id, year, month)
                )
            """)

            # Calendar events
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS events (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT,
                    start_date TEXT NOT NULL,
                    end_date TEXT,
                    type TEXT NOT NULL,
                    all_day INTEGER NOT NULL DEFAULT 1,
                    color TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Entries ====================

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> Entry:
        return Entry(
            id=row["id"],
            user_id=row["user_id"],
            date=date.fromisoformat(row["date"]),
            pnl=row["pnl"],
            trades=row["trades"],
        )

    def save_entry(self, entry: Entry) -> Entry:
        """Create or overwrite the entry for the entry's user and date.

        Args:
            entry: Entry to save. Its ``id`` is ignored.

        Returns:
            The stored entry, including its database ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO entries (user_id, date, pnl, trades)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(user_id, date) DO UPDATE SET
                    pnl = excluded.pnl,
                    trades = excluded.trades
                """,
                (entry.user_id, entry.key, entry.pnl, entry.trades),
            )
            conn.commit()
            cursor.execute(
                "SELECT id, user_id, date, pnl, trades FROM entries WHERE user_id = ? AND date = ?",
                (entry.user_id, entry.key),
            )
            saved = self._row_to_entry(cursor.fetchone())
        finally:
            conn.close()

        logger.debug("Saved entry %s for %s: pnl=%s", saved.key, saved.user_id, saved.pnl)
        return saved

    def get_entry(self, user_id: str, day: date) -> Optional[Entry]:
        """Get the entry for one day.

        Returns:
            Entry if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, user_id, date, pnl, trades FROM entries WHERE user_id = ? AND date = ?",
                (user_id, day.isoformat()),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_entry(row)
            return None
        finally:
            conn.close()

    def get_entries_by_month(
        self, user_id: str, year: int, month: int
    ) -> dict[str, Entry]:
        """Get one month of entries.

        Args:
            user_id: Owning user.
            year: Calendar year.
            month: Calendar month (1-12).

        Returns:
            Entries keyed by ISO date, in ascending date order.
        """
        start_key, end_key = month_key_range(year, month)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, user_id, date, pnl, trades
                FROM entries
                WHERE user_id = ? AND date >= ? AND date <= ?
                ORDER BY date ASC
                """,
                (user_id, start_key, end_key),
            )
            entries = [self._row_to_entry(row) for row in cursor.fetchall()]
            return {entry.key: entry for entry in entries}
        finally:
            conn.close()

    def get_all_entries(self, user_id: str) -> dict[str, Entry]:
        """Get every entry for a user, keyed by ISO date, oldest first."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, user_id, date, pnl, trades
                FROM entries
                WHERE user_id = ?
                ORDER BY date ASC
                """,
                (user_id,),
            )
            entries = [self._row_to_entry(row) for row in cursor.fetchall()]
            return {entry.key: entry for entry in entries}
        finally:
            conn.close()

    def delete_entry(self, user_id: str, day: date) -> bool:
        """Delete the entry for one day.

        Returns:
            True if an entry was removed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM entries WHERE user_id = ? AND date = ?",
                (user_id, day.isoformat()),
            )
            conn.commit()
            deleted = cursor.rowcount > 0
        finally:
            conn.close()

        if not deleted:
            logger.warning("No entry to delete for %s on %s", user_id, day.isoformat())
        return deleted

    # ==================== Goals ====================

    @staticmethod
    def _row_to_goal(row: sqlite3.Row) -> MonthlyGoal:
        return MonthlyGoal(
            id=row["id"],
            user_id=row["user_id"],
            year=row["year"],
            month=row["month"],
            amount=row["goal"],
        )

    def get_goal(self, user_id: str, year: int, month: int) -> Optional[MonthlyGoal]:
        """Get the goal for one month.

        Returns:
            MonthlyGoal if set, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, user_id, year, month, goal
                FROM monthly_goals
                WHERE user_id = ? AND year = ? AND month = ?
                """,
                (user_id, year, month),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_goal(row)
            return None
        finally:
            conn.close()

    def get_all_goals(self, user_id: str) -> list[MonthlyGoal]:
        """Get all goals for a user, most recent month first."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, user_id, year, month, goal
                FROM monthly_goals
                WHERE user_id = ?
                ORDER BY year DESC, month DESC
                """,
                (user_id,),
            )
            return [self._row_to_goal(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def upsert_goal(self, goal: MonthlyGoal) -> MonthlyGoal:
        """Create or replace the goal for the goal's user and month.

        Returns:
            The stored goal, including its database ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO monthly_goals (user_id, year, month, goal)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(user_id, year, month) DO UPDATE SET
                    goal = excluded.goal
                """,
                (goal.user_id, goal.year, goal.month, goal.amount),
            )
            conn.commit()
            cursor.execute(
                """
                SELECT id, user_id, year, month, goal
                FROM monthly_goals
                WHERE user_id = ? AND year = ? AND month = ?
                """,
                (goal.user_id, goal.year, goal.month),
            )
            saved = self._row_to_goal(cursor.fetchone())
        finally:
            conn.close()

        logger.debug(
            "Set goal for %s %04d-%02d: %s", goal.user_id, goal.year, goal.month, goal.amount
        )
        return saved

    def delete_goal(self, user_id: str, year: int, month: int) -> bool:
        """Delete the goal for one month.

        Returns:
            True if a goal was removed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM monthly_goals WHERE user_id = ? AND year = ? AND month = ?",
                (user_id, year, month),
            )
            conn.commit()
            deleted = cursor.rowcount > 0
        finally:
            conn.close()

        if not deleted:
            logger.warning("No goal to delete for %s %04d-%02d", user_id, year, month)
        return deleted

    # ==================== Events ====================

    @staticmethod
    def _row_to_event(row: sqlite3.Row) -> CalendarEvent:
        return CalendarEvent(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            description=row["description"],
            start_date=date.fromisoformat(row["start_date"]),
            end_date=date.fromisoformat(row["end_date"]) if row["end_date"] else None,
            type=row["type"],
            all_day=bool(row["all_day"]),
            color=row["color"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def create_event(self, event: CalendarEvent) -> CalendarEvent:
        """Save a new event.

        Returns:
            The stored event, including its database ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO events
                (user_id, title, description, start_date, end_date, type,
                 all_day, color, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event.user_id,
                    event.title,
                    event.description,
                    event.start_date.isoformat(),
                    event.end_date.isoformat() if event.end_date else None,
                    event.type,
                    1 if event.all_day else 0,
                    event.color,
                    event.created_at.isoformat(),
                    event.updated_at.isoformat(),
                ),
            )
            conn.commit()
            event_id = cursor.lastrowid or 0
        finally:
            conn.close()

        logger.debug("Created event %s: %s", event_id, event.title)
        return event.model_copy(update={"id": event_id})

    def get_event_by_id(self, event_id: int) -> Optional[CalendarEvent]:
        """Get an event by ID.

        Returns:
            CalendarEvent if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_EVENT_COLUMNS} FROM events WHERE id = ?",
                (event_id,),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_event(row)
            return None
        finally:
            conn.close()

    def update_event(
        self, user_id: str, event_id: int, **updates
    ) -> Optional[CalendarEvent]:
        """Apply field updates to one of a user's events.

        Args:
            user_id: Owner of the event.
            event_id: ID of the event to change.
            **updates: New values for any of title, description,
                start_date, end_date, type, all_day, color.

        Returns:
            The updated event, or None if the user has no event with that ID.

        Raises:
            ValueError: If an unknown field is given or the result is
                not a valid event.
        """
        unknown = set(updates) - _EVENT_FIELDS
        if unknown:
            raise ValueError(f"Unknown event fields: {sorted(unknown)}")

        existing = self.get_event_by_id(event_id)
        if existing is None or existing.user_id != user_id:
            logger.warning("Event not found for %s: %s", user_id, event_id)
            return None

        # Re-validate the merged event so range and colour rules still hold
        merged = CalendarEvent.model_validate(
            {**existing.model_dump(), **updates, "updated_at": datetime.now()}
        )

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE events SET
                    title = ?, description = ?, start_date = ?, end_date = ?,
                    type = ?, all_day = ?, color = ?, updated_at = ?
                WHERE id = ? AND user_id = ?
                """,
                (
                    merged.title,
                    merged.description,
                    merged.start_date.isoformat(),
                    merged.end_date.isoformat() if merged.end_date else None,
                    merged.type,
                    1 if merged.all_day else 0,
                    merged.color,
                    merged.updated_at.isoformat(),
                    event_id,
                    user_id,
                ),
            )
            conn.commit()
        finally:
            conn.close()

        return merged

    def delete_event(self, user_id: str, event_id: int) -> bool:
        """Delete one of a user's events.

        Returns:
            True if an event was removed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM events WHERE id = ? AND user_id = ?",
                (event_id, user_id),
            )
            conn.commit()
            deleted = cursor.rowcount > 0
        finally:
            conn.close()

        if not deleted:
            logger.warning("Event not found for %s: %s", user_id, event_id)
        return deleted

    def get_events(self, user_id: str) -> list[CalendarEvent]:
        """Get all events for a user, newest first."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM events
                WHERE user_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (user_id,),
            )
            return [self._row_to_event(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_events_by_date(self, user_id: str, day: date) -> list[CalendarEvent]:
        """Get the events whose date range includes ``day``."""
        return [event for event in self.get_events(user_id) if event.occurs_on(day)]

    def get_events_by_month(
        self, user_id: str, year: int, month: int
    ) -> list[CalendarEvent]:
        """Get the events overlapping a calendar month."""
        return [
            event
            for event in self.get_events(user_id)
            if event.overlaps_month(year, month)
        ]

    def clear_events(self, user_id: str) -> int:
        """Delete all of a user's events.

        Returns:
            Number of events removed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM events WHERE user_id = ?", (user_id,))
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
