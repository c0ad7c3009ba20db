"""Input parsing for values typed by the user.

These checks run before anything is stored or aggregated, so the engine
can assume every P&L is finite and every goal is a positive number.
"""

import math
import re
from datetime import date
from typing import Optional

_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")
# Commas are only accepted as thousands separators, e.g. "1,250.50".
_GROUPED_RE = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d*)?$")


def _parse_float(text: str, label: str) -> float:
    cleaned = str(text).strip()
    if "," in cleaned:
        if not _GROUPED_RE.match(cleaned):
            raise ValueError(f"Invalid {label}: {text!r} is not a number")
        cleaned = cleaned.replace(",", "")
    try:
        value = float(cleaned)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {label}: {text!r} is not a number")
    if not math.isfinite(value):
        raise ValueError(f"Invalid {label}: {text!r} is not a finite number")
    return value


def parse_pnl(text: str) -> float:
    """Parse a daily P&L amount (may be negative)."""
    return _parse_float(text, "P&L")


def parse_trades(text: Optional[str]) -> Optional[int]:
    """Parse an optional trade count.

    Returns:
        None when nothing was entered, otherwise a non-negative int.
    """
    if text is None or str(text).strip() == "":
        return None
    try:
        value = int(str(text).strip())
    except ValueError:
        raise ValueError(f"Invalid trade count: {text!r} is not a whole number")
    if value < 0:
        raise ValueError(f"Invalid trade count: {value} must not be negative")
    return value


def parse_goal(text: str) -> float:
    """Parse a monthly goal amount, which must be strictly positive."""
    try:
        value = _parse_float(text, "goal")
    except ValueError:
        raise ValueError("Please enter a valid positive number")
    if value <= 0:
        raise ValueError("Please enter a valid positive number")
    return value


def parse_date(text: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date."""
    try:
        return date.fromisoformat(str(text).strip())
    except ValueError:
        raise ValueError(f"Invalid date format: {text}. Use YYYY-MM-DD")


def parse_month(text: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` month into (year, month)."""
    match = _MONTH_RE.match(str(text).strip())
    if not match:
        raise ValueError(f"Invalid month format: {text}. Use YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}. Must be between 1 and 12")
    return year, month
