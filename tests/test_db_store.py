"""Property-based tests for the database store.

**Feature: pnl-calendar**
"""

import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from pnlcalendar.db.store import DataStore
from pnlcalendar.engine import compute_monthly_stats
from pnlcalendar.models import CalendarEvent, Entry, MonthlyGoal


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


class TestDatabaseSchemaCompleteness:
    """
    *For any* fresh database, all required tables (entries, monthly_goals,
    events) should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        tables = temp_db.get_tables()

        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_reopen_existing_database(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "test.db"
            DataStore(db_path).save_entry(Entry(date=date(2025, 11, 3), pnl=1.0))

            reopened = DataStore(db_path)

            assert reopened.get_stats()["entries"] == 1


class TestEntryUpsert:
    """
    *For any* sequence of submissions for the same day, only the last one
    is kept.
    """

    @given(
        pnls=st.lists(
            st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False),
            min_size=1,
            max_size=5,
        ),
    )
    @settings(max_examples=25, deadline=None)
    def test_resubmission_overwrites(self, pnls: list[float]):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            day = date(2025, 11, 3)

            for pnl in pnls:
                store.save_entry(Entry(date=day, pnl=pnl, trades=2))

            entries = store.get_entries_by_month("default", 2025, 11)
            assert list(entries) == ["2025-11-03"]
            assert entries["2025-11-03"].pnl == pnls[-1]

    def test_overwrite_keeps_id_and_clears_trades(self, temp_db: DataStore):
        first = temp_db.save_entry(Entry(date=date(2025, 11, 3), pnl=10.0, trades=3))
        second = temp_db.save_entry(Entry(date=date(2025, 11, 3), pnl=-4.0))

        assert first.id is not None
        assert second.id == first.id
        assert second.pnl == -4.0
        assert second.trades is None

    def test_missing_trades_round_trip_as_none(self, temp_db: DataStore):
        temp_db.save_entry(Entry(date=date(2025, 11, 3), pnl=10.0))
        temp_db.save_entry(Entry(date=date(2025, 11, 4), pnl=10.0, trades=0))

        assert temp_db.get_entry("default", date(2025, 11, 3)).trades is None
        assert temp_db.get_entry("default", date(2025, 11, 4)).trades == 0


class TestEntriesByMonth:
    """
    *For any* set of entries, a month query returns exactly the entries
    dated inside that calendar month, in ascending order.
    """

    @given(
        offsets=st.sets(st.integers(min_value=0, max_value=120), min_size=1, max_size=30),
    )
    @settings(max_examples=25, deadline=None)
    def test_month_filter(self, offsets: set[int]):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            base = date(2025, 9, 15)
            days = [base + timedelta(days=offset) for offset in offsets]
            for day in days:
                store.save_entry(Entry(date=day, pnl=1.0))

            entries = store.get_entries_by_month("default", 2025, 11)

            expected = sorted(d.isoformat() for d in days if (d.year, d.month) == (2025, 11))
            assert list(entries) == expected

    def test_month_ends_are_included(self, temp_db: DataStore):
        for day in (date(2025, 10, 31), date(2025, 11, 1), date(2025, 11, 30), date(2025, 12, 1)):
            temp_db.save_entry(Entry(date=day, pnl=1.0))

        entries = temp_db.get_entries_by_month("default", 2025, 11)

        assert list(entries) == ["2025-11-01", "2025-11-30"]

    def test_users_are_isolated(self, temp_db: DataStore):
        temp_db.save_entry(Entry(user_id="alice", date=date(2025, 11, 3), pnl=100.0))
        temp_db.save_entry(Entry(user_id="bob", date=date(2025, 11, 3), pnl=-50.0))

        alice = temp_db.get_entries_by_month("alice", 2025, 11)
        bob = temp_db.get_all_entries("bob")

        assert alice["2025-11-03"].pnl == 100.0
        assert bob["2025-11-03"].pnl == -50.0

    def test_stats_from_stored_month(self, temp_db: DataStore):
        temp_db.save_entry(Entry(date=date(2025, 11, 25), pnl=329.73, trades=3))
        temp_db.save_entry(Entry(date=date(2025, 11, 26), pnl=-299.31, trades=5))
        temp_db.save_entry(Entry(date=date(2025, 11, 28), pnl=-501.95))

        stats = compute_monthly_stats(
            temp_db.get_entries_by_month("default", 2025, 11).values()
        )

        assert stats.total_pnl == pytest.approx(-471.53)
        assert stats.winning_days == 1
        assert stats.losing_days == 2
        assert stats.total_trades == 8

    def test_delete_entry(self, temp_db: DataStore):
        temp_db.save_entry(Entry(date=date(2025, 11, 3), pnl=1.0))

        assert temp_db.delete_entry("default", date(2025, 11, 3)) is True
        assert temp_db.get_entry("default", date(2025, 11, 3)) is None
        assert temp_db.delete_entry("default", date(2025, 11, 3)) is False


class TestMonthlyGoals:
    """
    *For any* (user, year, month) there is at most one goal; upserting
    replaces it.
    """

    @given(
        amounts=st.lists(
            st.floats(min_value=0.01, max_value=1e7, allow_nan=False, allow_infinity=False),
            min_size=1,
            max_size=5,
        ),
    )
    @settings(max_examples=25, deadline=None)
    def test_upsert_keeps_single_goal(self, amounts: list[float]):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")

            for amount in amounts:
                store.upsert_goal(MonthlyGoal(year=2025, month=11, amount=amount))

            goals = store.get_all_goals("default")
            assert len(goals) == 1
            assert goals[0].amount == amounts[-1]

    def test_goal_absent_until_set(self, temp_db: DataStore):
        assert temp_db.get_goal("default", 2025, 11) is None

        saved = temp_db.upsert_goal(MonthlyGoal(year=2025, month=11, amount=1000.0))

        assert saved.id is not None
        assert temp_db.get_goal("default", 2025, 11).amount == 1000.0
        assert temp_db.get_goal("default", 2025, 12) is None

    def test_goals_ordered_newest_first(self, temp_db: DataStore):
        for year, month in [(2025, 3), (2024, 12), (2025, 11)]:
            temp_db.upsert_goal(MonthlyGoal(year=year, month=month, amount=100.0))

        goals = temp_db.get_all_goals("default")

        assert [(g.year, g.month) for g in goals] == [(2025, 11), (2025, 3), (2024, 12)]

    def test_delete_goal(self, temp_db: DataStore):
        temp_db.upsert_goal(MonthlyGoal(year=2025, month=11, amount=500.0))

        assert temp_db.delete_goal("default", 2025, 11) is True
        assert temp_db.get_goal("default", 2025, 11) is None
        assert temp_db.delete_goal("default", 2025, 11) is False


class TestEvents:
    """
    *For any* created event, it is retrievable by ID, by each date it
    covers and by each month it overlaps; after deletion it is gone.
    """

    def _event(self, **overrides) -> CalendarEvent:
        fields = {
            "title": "FOMC",
            "start_date": date(2025, 11, 5),
            "type": "market",
        }
        fields.update(overrides)
        return CalendarEvent(**fields)

    def test_create_and_get(self, temp_db: DataStore):
        saved = temp_db.create_event(self._event(description="Rate decision"))

        loaded = temp_db.get_event_by_id(saved.id)

        assert loaded is not None
        assert loaded.title == "FOMC"
        assert loaded.description == "Rate decision"
        assert loaded.type == "market"
        assert loaded.end_date is None

    def test_events_by_date_range(self, temp_db: DataStore):
        temp_db.create_event(self._event(
            title="Vacation",
            type="break",
            start_date=date(2025, 11, 28),
            end_date=date(2025, 12, 3),
        ))

        assert [e.title for e in temp_db.get_events_by_date("default", date(2025, 12, 1))] == ["Vacation"]
        assert temp_db.get_events_by_date("default", date(2025, 12, 4)) == []
        assert len(temp_db.get_events_by_month("default", 2025, 11)) == 1
        assert len(temp_db.get_events_by_month("default", 2025, 12)) == 1
        assert temp_db.get_events_by_month("default", 2026, 1) == []

    def test_update_event(self, temp_db: DataStore):
        saved = temp_db.create_event(self._event())

        updated = temp_db.update_event("default", saved.id, title="CPI", end_date=date(2025, 11, 6))

        assert updated.title == "CPI"
        assert updated.updated_at >= saved.updated_at
        assert temp_db.get_event_by_id(saved.id).end_date == date(2025, 11, 6)

    def test_update_rejects_invalid_range(self, temp_db: DataStore):
        saved = temp_db.create_event(self._event())

        with pytest.raises(ValueError):
            temp_db.update_event("default", saved.id, end_date=date(2025, 11, 1))

    def test_update_rejects_unknown_field(self, temp_db: DataStore):
        saved = temp_db.create_event(self._event())

        with pytest.raises(ValueError):
            temp_db.update_event("default", saved.id, created_at=datetime(2020, 1, 1))

    def test_update_missing_event(self, temp_db: DataStore):
        assert temp_db.update_event("default", 999, title="Nope") is None

    def test_other_users_event_untouched(self, temp_db: DataStore):
        """Update and delete only act on the caller's own events."""
        saved = temp_db.create_event(self._event(user_id="alice"))

        assert temp_db.update_event("bob", saved.id, title="Hijacked") is None
        assert temp_db.delete_event("bob", saved.id) is False

        loaded = temp_db.get_event_by_id(saved.id)
        assert loaded is not None
        assert loaded.title == "FOMC"
        assert temp_db.update_event("alice", saved.id, title="CPI").title == "CPI"

    def test_delete_and_clear(self, temp_db: DataStore):
        first = temp_db.create_event(self._event())
        temp_db.create_event(self._event(title="NFP"))

        assert temp_db.delete_event("default", first.id) is True
        assert temp_db.delete_event("default", first.id) is False
        assert temp_db.clear_events("default") == 1
        assert temp_db.get_events("default") == []
