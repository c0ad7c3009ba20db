"""Monthly P&L aggregation and goal progress.

Every function in this module is pure: it reads a snapshot of entries
(and optionally a goal amount) and returns freshly built result models.
Nothing is cached between calls.
"""

from datetime import timedelta
from typing import Iterable, Optional

from pnlcalendar.models import (
    CumulativeSeries,
    Entry,
    GoalProgress,
    MonthlyStats,
    SeriesPoint,
    SeriesSummary,
)

# Number of days covered by each chart window; None means no cutoff.
WINDOW_DAYS: dict[str, Optional[int]] = {
    "7d": 7,
    "30d": 30,
    "all": None,
}


def compute_monthly_stats(entries: Iterable[Entry]) -> MonthlyStats:
    """Calculate monthly statistics from a set of entries.

    Days with a P&L of exactly zero are counted as neither winning nor
    losing. Entries without a recorded trade count contribute 0 trades.

    Args:
        entries: Entries for one month, in any order.

    Returns:
        MonthlyStats for the given entries (all zero if empty).
    """
    total_pnl = 0.0
    winning_days = 0
    losing_days = 0
    total_trades = 0

    for entry in entries:
        total_pnl += entry.pnl
        if entry.pnl > 0:
            winning_days += 1
        elif entry.pnl < 0:
            losing_days += 1
        if entry.trades is not None:
            total_trades += entry.trades

    return MonthlyStats(
        total_pnl=total_pnl,
        winning_days=winning_days,
        losing_days=losing_days,
        total_trades=total_trades,
    )


def compute_goal_progress(
    goal_amount: Optional[float], stats: MonthlyStats
) -> Optional[GoalProgress]:
    """Combine a monthly goal with the month's stats.

    ``remaining`` is signed: once the month's P&L passes the goal it goes
    negative and ``GoalProgress.over_goal`` becomes true.

    Args:
        goal_amount: Validated positive goal, or None if no goal is set.
        stats: Statistics for the same month.

    Returns:
        GoalProgress, or None when no goal is configured.
    """
    if goal_amount is None:
        return None

    current = stats.total_pnl
    progress = current / goal_amount * 100
    return GoalProgress(
        goal=goal_amount,
        current=current,
        percentage=max(0.0, min(100.0, progress)),
        remaining=goal_amount - current,
    )


def parse_window(window: str) -> Optional[int]:
    """Resolve a window name to its length in days.

    Raises:
        ValueError: If the window name is unknown.
    """
    if window not in WINDOW_DAYS:
        raise ValueError(
            f"Invalid window: {window}. Must be one of {list(WINDOW_DAYS.keys())}"
        )
    return WINDOW_DAYS[window]


def build_series_points(entries: Iterable[Entry]) -> list[SeriesPoint]:
    """Sort entries by date and attach running totals."""
    ordered = sorted(entries, key=lambda entry: entry.date)

    points = []
    running_total = 0.0
    for entry in ordered:
        running_total += entry.pnl
        points.append(
            SeriesPoint(
                date=entry.date,
                daily_pnl=entry.pnl,
                cumulative_pnl=running_total,
            )
        )
    return points


def filter_window(points: list[SeriesPoint], window: str) -> list[SeriesPoint]:
    """Keep the points inside a trailing window.

    The window ends at the most recent date present in ``points``, not at
    today's date, so a "7d" view always shows the last week of recorded
    trading.

    Args:
        points: Series points in ascending date order.
        window: One of ``WINDOW_DAYS``.

    Returns:
        The points whose date is within the window.
    """
    days = parse_window(window)
    if days is None or not points:
        return list(points)

    end = points[-1].date
    start = end - timedelta(days=days - 1)
    return [point for point in points if point.date >= start]


def summarize_window(points: list[SeriesPoint]) -> SeriesSummary:
    """Calculate headline figures for a (possibly filtered) series."""
    if not points:
        return SeriesSummary()

    daily = [point.daily_pnl for point in points]
    winning_days = sum(1 for pnl in daily if pnl > 0)

    return SeriesSummary(
        total_pnl=points[-1].cumulative_pnl,
        win_rate=winning_days / len(points) * 100,
        best_day=max(daily),
        worst_day=min(daily),
    )


def build_cumulative_series(
    entries: Iterable[Entry], window: str = "all"
) -> CumulativeSeries:
    """Build the chart series and its summary.

    Running totals are accumulated over the full history first and then
    filtered, so each point keeps its all-time cumulative value.

    Args:
        entries: All entries to chart (may span many months).
        window: "7d", "30d" or "all".

    Returns:
        CumulativeSeries with the windowed points and their summary.

    Raises:
        ValueError: If the window name is unknown.
    """
    parse_window(window)
    points = filter_window(build_series_points(entries), window)
    return CumulativeSeries(
        window=window,
        points=tuple(points),
        summary=summarize_window(points),
    )
