"""Journal commands for the pnlcalendar CLI.

Handles recording and deleting daily P&L entries and the monthly
calendar view.
"""

import calendar
import sqlite3
from datetime import date
from typing import Optional

import click
from rich.columns import Columns
from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from pnlcalendar.cli.common import (
    colored_currency,
    console,
    fail,
    format_currency,
    get_data_store,
    resolve_month,
)

_STATUS_STYLES = {
    "profit": "green",
    "loss": "red",
    "flat": "yellow",
    "empty": "dim",
}


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Create a template configuration file.

    \b
    Examples:
      pnlcal init
      pnlcal init --force
    """
    from pnlcalendar.config import create_template_config, get_config_path

    config_path = get_config_path()
    if config_path.exists() and not force:
        console.print(Panel(
            f"[yellow]Config already exists:[/yellow] [cyan]{config_path}[/cyan]\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Init[/bold yellow]",
            border_style="yellow",
        ))
        return

    written = create_template_config(config_path)
    console.print(Panel(
        f"Config written to [cyan]{written}[/cyan]",
        title="[bold green]Init[/bold green]",
        border_style="green",
    ))


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("entry_date")
@click.argument("pnl_value", metavar="PNL")
@click.option("--trades", type=str, default=None, help="Number of trades taken that day.")
@click.pass_obj
def add(obj: dict, entry_date: str, pnl_value: str, trades: Optional[str]) -> None:
    """Record (or overwrite) the P&L for a day.

    \b
    Examples:
      pnlcal add 2025-11-03 250
      pnlcal add 2025-11-04 -120.50 --trades 3
    """
    from pnlcalendar.config import get_currency, get_user
    from pnlcalendar.models import Entry
    from pnlcalendar.validation import parse_date, parse_pnl, parse_trades

    config = obj["config"]

    try:
        entry = Entry(
            user_id=get_user(config),
            date=parse_date(entry_date),
            pnl=parse_pnl(pnl_value),
            trades=parse_trades(trades),
        )
    except ValueError as e:
        fail(str(e), title="Invalid Entry")

    store = get_data_store(config)
    try:
        saved = store.save_entry(entry)
    except sqlite3.Error as e:
        fail(f"Failed to save entry. Please try again.\n\n{e}")

    symbol = get_currency(config)
    trades_text = f" ({saved.trades} trade{'s' if saved.trades != 1 else ''})" if saved.trades is not None else ""
    console.print(
        f"[bold]{saved.key}[/bold]: {colored_currency(saved.pnl, symbol)}{trades_text} saved"
    )


@click.command()
@click.argument("entry_date")
@click.pass_obj
def delete(obj: dict, entry_date: str) -> None:
    """Delete the P&L entry for a day.

    \b
    Examples:
      pnlcal delete 2025-11-03
    """
    from pnlcalendar.config import get_user
    from pnlcalendar.validation import parse_date

    config = obj["config"]

    try:
        day = parse_date(entry_date)
    except ValueError as e:
        fail(str(e))

    store = get_data_store(config)
    try:
        deleted = store.delete_entry(get_user(config), day)
    except sqlite3.Error as e:
        fail(f"Failed to delete entry. Please try again.\n\n{e}")

    if deleted:
        console.print(f"[bold]{day.isoformat()}[/bold]: entry deleted")
    else:
        console.print(f"[dim]No entry for {day.isoformat()}[/dim]")


def _render_cell(cell, symbol: str) -> str:
    """Render one calendar day as rich markup."""
    if cell is None:
        return ""

    day_label = f"[reverse]{cell.day:>2}[/reverse]" if cell.is_today else f"{cell.day:>2}"
    lines = [f"[bold]{day_label}[/bold]"]

    if cell.entry is not None:
        style = _STATUS_STYLES[cell.status]
        lines.append(f"[{style}]{format_currency(cell.entry.pnl, symbol)}[/{style}]")
        if cell.entry.trades:
            plural = "s" if cell.entry.trades != 1 else ""
            lines.append(f"[dim]{cell.entry.trades} trade{plural}[/dim]")

    for event in cell.events:
        lines.append(f"[{event.display_color}]• {escape(event.title)}[/{event.display_color}]")

    return "\n".join(lines)


def render_month_grid(grid, title: str, symbol: str) -> Table:
    """Build a rich table for a month grid."""
    table = Table(title=title, show_header=True, header_style="bold cyan", show_lines=True)
    for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"):
        table.add_column(name, justify="left")

    for week in grid:
        table.add_row(*(_render_cell(cell, symbol) for cell in week))
    return table


def render_stats(stats, symbol: str) -> Columns:
    """Build the monthly stat cards."""
    cards = [
        ("Monthly P&L", colored_currency(stats.total_pnl, symbol)),
        ("Trading Days", str(stats.trading_days)),
        ("Winning Days", f"[green]{stats.winning_days}[/green]"),
        ("Losing Days", f"[red]{stats.losing_days}[/red]"),
        ("Total Trades", str(stats.total_trades)),
    ]
    return Columns(
        [Panel(value, title=f"[dim]{label}[/dim]", expand=False) for label, value in cards]
    )


def render_goal(progress, symbol: str) -> Panel:
    """Build the goal progress panel."""
    if progress is None:
        return Panel(
            "[dim]No goal set for this month.[/dim]\n"
            "Run [cyan]pnlcal goal set AMOUNT[/cyan] to add one.",
            title="[bold]Monthly Goal[/bold]",
            border_style="dim",
        )

    if progress.remaining == 0:
        remaining_text = "[green]Goal reached[/green]"
    elif progress.over_goal:
        remaining_text = f"Over Goal: [green]{symbol}{abs(progress.remaining):,.2f}[/green]"
    else:
        remaining_text = f"Remaining: {symbol}{progress.remaining:,.2f}"

    bar = ProgressBar(
        total=100,
        completed=progress.percentage,
        width=40,
        complete_style="green" if progress.percentage >= 100 else "blue",
    )

    figures = Table.grid(padding=(0, 3))
    figures.add_row(
        f"Goal: {symbol}{progress.goal:,.2f}",
        f"Current: {colored_currency(progress.current, symbol)}",
        remaining_text,
    )

    body = Group(figures, bar, f"{progress.percentage:.1f}% of goal achieved")
    return Panel(body, title="[bold cyan]Monthly Goal[/bold cyan]", border_style="cyan")


@click.command()
@click.option("--month", "month_text", type=str, default=None, help="Month to show (YYYY-MM). Defaults to this month.")
@click.option("--offset", type=int, default=0, help="Months to move from --month (e.g. -1 for the previous month).")
@click.pass_obj
def month(obj: dict, month_text: Optional[str], offset: int) -> None:
    """Show the calendar, stats and goal progress for a month.

    \b
    Examples:
      pnlcal month
      pnlcal month --month 2025-11
      pnlcal month --offset -1
    """
    from pnlcalendar.config import get_currency, get_user
    from pnlcalendar.engine import (
        build_month_grid,
        compute_goal_progress,
        compute_monthly_stats,
        shift_month,
    )

    config = obj["config"]
    year, month_number = shift_month(*resolve_month(month_text), offset)
    if not 1 <= year <= 9999:
        fail(f"Month out of range: {year}-{month_number:02d}")
    user = get_user(config)
    symbol = get_currency(config)

    store = get_data_store(config)
    entries = store.get_entries_by_month(user, year, month_number)
    goal = store.get_goal(user, year, month_number)
    events = store.get_events_by_month(user, year, month_number)

    stats = compute_monthly_stats(entries.values())
    progress = compute_goal_progress(goal.amount if goal else None, stats)
    grid = build_month_grid(year, month_number, entries, events, today=date.today())

    title = f"{calendar.month_name[month_number]} {year}"
    console.print(render_month_grid(grid, title, symbol))
    console.print(render_stats(stats, symbol))
    console.print(render_goal(progress, symbol))

    if events:
        console.print(f"\n[bold]Events this month:[/bold] {len(events)}")
        for event in sorted(events, key=lambda e: e.start_date):
            span = event.start_date.isoformat()
            if event.end_date and event.end_date != event.start_date:
                span += f" → {event.end_date.isoformat()}"
            console.print(f"  [{event.display_color}]●[/{event.display_color}] {span}  {escape(event.title)}")
