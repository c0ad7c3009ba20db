"""Monthly goal commands for the pnlcalendar CLI."""

import calendar
import sqlite3
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from pnlcalendar.cli.common import console, fail, get_data_store, resolve_month

_MONTH_OPTION = click.option(
    "--month",
    "month_text",
    type=str,
    default=None,
    help="Month (YYYY-MM). Defaults to this month.",
)


@click.group()
def goal() -> None:
    """Set, show and clear monthly P&L goals.

    \b
    Examples:
      pnlcal goal set 1000
      pnlcal goal show --month 2025-11
      pnlcal goal clear
      pnlcal goal list
    """


@goal.command("set", context_settings={"ignore_unknown_options": True})
@click.argument("amount")
@_MONTH_OPTION
@click.pass_obj
def set_goal(obj: dict, amount: str, month_text: Optional[str]) -> None:
    """Set (or replace) the goal for a month."""
    from pnlcalendar.config import get_currency, get_user
    from pnlcalendar.models import MonthlyGoal
    from pnlcalendar.validation import parse_goal

    config = obj["config"]
    year, month_number = resolve_month(month_text)

    try:
        new_goal = MonthlyGoal(
            user_id=get_user(config),
            year=year,
            month=month_number,
            amount=parse_goal(amount),
        )
    except ValueError as e:
        fail(str(e), title="Invalid Goal")

    store = get_data_store(config)
    try:
        saved = store.upsert_goal(new_goal)
    except sqlite3.Error as e:
        fail(f"Failed to save goal. Please try again.\n\n{e}")

    console.print(
        f"Goal for [bold]{calendar.month_name[saved.month]} {saved.year}[/bold] "
        f"set to [green]{get_currency(config)}{saved.amount:,.2f}[/green]"
    )


@goal.command("clear")
@_MONTH_OPTION
@click.pass_obj
def clear_goal(obj: dict, month_text: Optional[str]) -> None:
    """Remove the goal for a month."""
    from pnlcalendar.config import get_user

    config = obj["config"]
    year, month_number = resolve_month(month_text)

    store = get_data_store(config)
    try:
        deleted = store.delete_goal(get_user(config), year, month_number)
    except sqlite3.Error as e:
        fail(f"Failed to clear goal. Please try again.\n\n{e}")

    label = f"{calendar.month_name[month_number]} {year}"
    if deleted:
        console.print(f"Goal for [bold]{label}[/bold] cleared")
    else:
        console.print(f"[dim]No goal set for {label}[/dim]")


@goal.command("show")
@_MONTH_OPTION
@click.pass_obj
def show_goal(obj: dict, month_text: Optional[str]) -> None:
    """Show progress towards a month's goal."""
    from pnlcalendar.cli.journal import render_goal
    from pnlcalendar.config import get_currency, get_user
    from pnlcalendar.engine import compute_goal_progress, compute_monthly_stats

    config = obj["config"]
    year, month_number = resolve_month(month_text)
    user = get_user(config)

    store = get_data_store(config)
    current_goal = store.get_goal(user, year, month_number)
    entries = store.get_entries_by_month(user, year, month_number)

    stats = compute_monthly_stats(entries.values())
    progress = compute_goal_progress(
        current_goal.amount if current_goal else None, stats
    )
    console.print(render_goal(progress, get_currency(config)))


@goal.command("list")
@click.pass_obj
def list_goals(obj: dict) -> None:
    """List every goal with its progress."""
    from pnlcalendar.config import get_currency, get_user
    from pnlcalendar.engine import compute_goal_progress, compute_monthly_stats

    config = obj["config"]
    user = get_user(config)
    symbol = get_currency(config)

    store = get_data_store(config)
    goals = store.get_all_goals(user)

    if not goals:
        console.print(Panel(
            "[dim]No goals set[/dim]",
            title="[bold]Monthly Goals[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Monthly Goals", show_header=True, header_style="bold cyan")
    table.add_column("Month", style="bold")
    table.add_column("Goal", justify="right")
    table.add_column("Current", justify="right")
    table.add_column("Progress", justify="right")

    for item in goals:
        entries = store.get_entries_by_month(user, item.year, item.month)
        progress = compute_goal_progress(
            item.amount, compute_monthly_stats(entries.values())
        )
        color = "green" if progress.current >= 0 else "red"
        table.add_row(
            f"{item.year:04d}-{item.month:02d}",
            f"{symbol}{item.amount:,.2f}",
            f"[{color}]{symbol}{progress.current:,.2f}[/{color}]",
            f"{progress.percentage:.1f}%",
        )

    console.print(table)
