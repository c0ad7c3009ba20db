"""Calendar event commands for the pnlcalendar CLI.

Events annotate days with news, breaks, milestones and reminders.
"""

import sqlite3
from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from pnlcalendar.cli.common import console, fail, get_data_store, resolve_month
from pnlcalendar.models.event import EVENT_TYPE_COLORS, EVENT_TYPE_LABELS

_TYPE_CHOICE = click.Choice(list(EVENT_TYPE_COLORS.keys()))


def _print_events(events: list, title: str) -> None:
    if not events:
        console.print(Panel(
            "[dim]No events found[/dim]",
            title=f"[bold]{title}[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date", style="bold")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Description", max_width=30)

    for event in events:
        span = event.start_date.isoformat()
        if event.end_date and event.end_date != event.start_date:
            span += f" → {event.end_date.isoformat()}"
        color = event.display_color
        table.add_row(
            str(event.id),
            span,
            f"[{color}]{EVENT_TYPE_LABELS[event.type]}[/{color}]",
            escape(event.title),
            escape(event.description or "-"),
        )

    console.print(table)


@click.group()
def event() -> None:
    """Create, list, edit and delete calendar events.

    \b
    Examples:
      pnlcal event add "FOMC" --date 2025-11-05 --type market
      pnlcal event add "Vacation" --date 2025-12-22 --end 2025-12-31 --type break
      pnlcal event list --month 2025-11
      pnlcal event delete 3
    """


@event.command("add")
@click.argument("title")
@click.option("--date", "start_text", required=True, help="Start date (YYYY-MM-DD).")
@click.option("--end", "end_text", default=None, help="End date for multi-day events.")
@click.option("--type", "event_type", type=_TYPE_CHOICE, default="custom", help="Event category.")
@click.option("--description", default=None, help="Event details.")
@click.option("--color", default=None, help="Hex colour (e.g. #FF5733).")
@click.pass_obj
def add_event(
    obj: dict,
    title: str,
    start_text: str,
    end_text: Optional[str],
    event_type: str,
    description: Optional[str],
    color: Optional[str],
) -> None:
    """Add an event to the calendar."""
    from pnlcalendar.config import get_user
    from pnlcalendar.models import CalendarEvent
    from pnlcalendar.validation import parse_date

    config = obj["config"]

    try:
        new_event = CalendarEvent(
            user_id=get_user(config),
            title=title,
            description=description,
            start_date=parse_date(start_text),
            end_date=parse_date(end_text) if end_text else None,
            type=event_type,
            color=color,
        )
    except ValueError as e:
        fail(str(e), title="Invalid Event")

    store = get_data_store(config)
    try:
        saved = store.create_event(new_event)
    except sqlite3.Error as e:
        fail(f"Failed to save event. Please try again.\n\n{e}")

    console.print(f"Event [bold]#{saved.id}[/bold] created: {escape(saved.title)}")


@event.command("list")
@click.option("--month", "month_text", default=None, help="Only events overlapping this month (YYYY-MM).")
@click.option("--date", "date_text", default=None, help="Only events on this day (YYYY-MM-DD).")
@click.pass_obj
def list_events(obj: dict, month_text: Optional[str], date_text: Optional[str]) -> None:
    """List events, optionally for one month or day."""
    from pnlcalendar.config import get_user
    from pnlcalendar.validation import parse_date

    config = obj["config"]
    user = get_user(config)
    store = get_data_store(config)

    if date_text:
        try:
            day = parse_date(date_text)
        except ValueError as e:
            fail(str(e))
        _print_events(store.get_events_by_date(user, day), f"Events on {day.isoformat()}")
    elif month_text:
        year, month_number = resolve_month(month_text)
        _print_events(
            store.get_events_by_month(user, year, month_number),
            f"Events in {year:04d}-{month_number:02d}",
        )
    else:
        _print_events(store.get_events(user), "All Events")


@event.command("edit")
@click.argument("event_id", type=int)
@click.option("--title", default=None, help="New title.")
@click.option("--date", "start_text", default=None, help="New start date (YYYY-MM-DD).")
@click.option("--end", "end_text", default=None, help="New end date (YYYY-MM-DD).")
@click.option("--type", "event_type", type=_TYPE_CHOICE, default=None, help="New category.")
@click.option("--description", default=None, help="New details.")
@click.option("--color", default=None, help="New hex colour.")
@click.pass_obj
def edit_event(
    obj: dict,
    event_id: int,
    title: Optional[str],
    start_text: Optional[str],
    end_text: Optional[str],
    event_type: Optional[str],
    description: Optional[str],
    color: Optional[str],
) -> None:
    """Change fields of an existing event."""
    from pnlcalendar.config import get_user
    from pnlcalendar.validation import parse_date

    config = obj["config"]

    try:
        updates = {
            "title": title,
            "start_date": parse_date(start_text) if start_text else None,
            "end_date": parse_date(end_text) if end_text else None,
            "type": event_type,
            "description": description,
            "color": color,
        }
    except ValueError as e:
        fail(str(e))
    updates = {key: value for key, value in updates.items() if value is not None}

    if not updates:
        console.print("[dim]Nothing to change[/dim]")
        return

    store = get_data_store(config)
    try:
        updated = store.update_event(get_user(config), event_id, **updates)
    except ValueError as e:
        fail(str(e), title="Invalid Event")
    except sqlite3.Error as e:
        fail(f"Failed to update event. Please try again.\n\n{e}")

    if updated is None:
        fail(f"Event not found: {event_id}")

    console.print(f"Event [bold]#{updated.id}[/bold] updated: {escape(updated.title)}")


@event.command("delete")
@click.argument("event_id", type=int)
@click.pass_obj
def delete_event(obj: dict, event_id: int) -> None:
    """Delete an event by ID."""
    from pnlcalendar.config import get_user

    config = obj["config"]

    store = get_data_store(config)
    try:
        deleted = store.delete_event(get_user(config), event_id)
    except sqlite3.Error as e:
        fail(f"Failed to delete event. Please try again.\n\n{e}")

    if not deleted:
        fail(f"Event not found: {event_id}")

    console.print(f"Event [bold]#{event_id}[/bold] deleted")


@event.command("clear")
@click.confirmation_option(prompt="Delete all events?")
@click.pass_obj
def clear_events(obj: dict) -> None:
    """Delete every event."""
    from pnlcalendar.config import get_user

    config = obj["config"]
    removed = get_data_store(config).clear_events(get_user(config))
    console.print(f"Removed {removed} event{'s' if removed != 1 else ''}")
