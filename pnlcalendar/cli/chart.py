"""Cumulative P&L chart command for the pnlcalendar CLI."""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from pnlcalendar.cli.common import colored_currency, console, get_data_store
from pnlcalendar.engine.aggregation import WINDOW_DAYS

_RANGE_LABELS = {
    "7d": "Last 7 days",
    "30d": "Last 30 days",
    "all": "All time",
}

# Width of the inline bar drawn for each day's cumulative value.
_BAR_WIDTH = 24


def _bar(value: float, scale: float) -> str:
    if scale <= 0:
        return ""
    length = max(1, round(abs(value) / scale * _BAR_WIDTH)) if value else 0
    color = "green" if value >= 0 else "red"
    return f"[{color}]{'█' * length}[/{color}]"


@click.command()
@click.option(
    "--range",
    "window",
    type=click.Choice(list(WINDOW_DAYS.keys())),
    default=None,
    help="Time range to chart (default from config, else 30d).",
)
@click.pass_obj
def chart(obj: dict, window: Optional[str]) -> None:
    """Show daily and cumulative P&L over time.

    The 7d and 30d ranges end at the most recent recorded day,
    not at today's date.

    \b
    Examples:
      pnlcal chart
      pnlcal chart --range 7d
      pnlcal chart --range all
    """
    from pnlcalendar.config import get_currency, get_user
    from pnlcalendar.engine import build_cumulative_series

    config = obj["config"]
    symbol = get_currency(config)
    if window is None:
        window = config.get("journal", {}).get("default_range", "30d")
        if window not in WINDOW_DAYS:
            window = "30d"

    store = get_data_store(config)
    entries = store.get_all_entries(get_user(config))
    series = build_cumulative_series(entries.values(), window)

    if not series.points:
        console.print(Panel(
            "[dim]No trading data available for this period[/dim]",
            title="[bold]P&L Performance Chart[/bold]",
            border_style="dim",
        ))
        return

    summary = series.summary
    header = (
        f"Cumulative: {colored_currency(summary.total_pnl, symbol)}  |  "
        f"Win Rate: {summary.win_rate:.1f}%  |  "
        f"Best Day: {colored_currency(summary.best_day, symbol)}  |  "
        f"Worst Day: {colored_currency(summary.worst_day, symbol)}"
    )
    console.print(Panel(
        header,
        title=f"[bold cyan]P&L Performance Chart[/bold cyan] ({_RANGE_LABELS[window]})",
        border_style="cyan",
    ))

    scale = max(abs(point.cumulative_pnl) for point in series.points)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Daily P&L", justify="right")
    table.add_column("Cumulative", justify="right")
    table.add_column("", no_wrap=True)

    for point in series.points:
        table.add_row(
            point.date.isoformat(),
            colored_currency(point.daily_pnl, symbol),
            colored_currency(point.cumulative_pnl, symbol),
            _bar(point.cumulative_pnl, scale),
        )

    console.print(table)
