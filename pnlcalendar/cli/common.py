"""Helpers shared by the pnlcalendar CLI commands."""

from datetime import date
from typing import NoReturn, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()


def get_config() -> dict:
    """Lazily load configuration."""
    from pnlcalendar.config import load_config

    return load_config()


def get_data_store(config: dict):
    """Get the data store instance."""
    from pnlcalendar.config import get_db_path
    from pnlcalendar.db.store import DataStore

    return DataStore(get_db_path(config))


def fail(message: str, title: str = "Error") -> NoReturn:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def format_currency(amount: float, symbol: str = "$") -> str:
    """Format an amount with an explicit sign, e.g. ``+$12.50``."""
    prefix = "+" if amount >= 0 else "-"
    return f"{prefix}{symbol}{abs(amount):,.2f}"


def colored_currency(amount: float, symbol: str = "$") -> str:
    """Format an amount in green (>= 0) or red (< 0) rich markup."""
    color = "green" if amount >= 0 else "red"
    return f"[{color}]{format_currency(amount, symbol)}[/{color}]"


def resolve_month(month: Optional[str]) -> tuple[int, int]:
    """Parse a --month option, defaulting to the current month."""
    from pnlcalendar.validation import parse_month

    if month is None:
        today = date.today()
        return today.year, today.month
    try:
        return parse_month(month)
    except ValueError as e:
        fail(str(e))
