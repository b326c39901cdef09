"""
Shared utility functions for the Fitbit SDK and MCP server.

Date conversions and request parameter formatting used across modules.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple, Union

DateLike = Union[date, str]
TimeLike = Union[time, datetime, str]

# Ordered (name, value) pairs sent as query string or urlencoded body
Params = List[Tuple[str, str]]


def format_date(value: DateLike) -> str:
    """Format a date as Fitbit's yyyy-MM-dd.

    Args:
        value: date/datetime, or a string that is passed through untouched

    Returns:
        Date string like "2011-01-16"
    """
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)


def format_time(value: TimeLike) -> str:
    """Format a time of day as HH:mm.

    Args:
        value: time/datetime, or a string that is passed through untouched

    Returns:
        Time string like "07:30"
    """
    if isinstance(value, (time, datetime)):
        return value.strftime("%H:%M")
    return str(value)


def parse_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD string into a date."""
    return datetime.strptime(date_str, "%Y-%m-%d").date()


def format_duration(millis: int) -> str:
    """Format a Fitbit duration (milliseconds) into human-readable form.

    Args:
        millis: Duration in milliseconds

    Returns:
        Formatted string like "1h01m01s" or "25m30s"
    """
    if not millis or millis <= 0:
        return "0s"
    seconds = millis // 1000
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    if h > 0:
        return f"{h}h{m:02d}m{s:02d}s"
    if m > 0:
        return f"{m}m{s:02d}s"
    return f"{s}s"


def format_minutes(minutes: int) -> str:
    """Format a minute count like "7h32m"."""
    if not minutes or minutes <= 0:
        return "0m"
    h, m = divmod(minutes, 60)
    return f"{h}h{m:02d}m" if h else f"{m}m"


def format_param_value(value: Any) -> str:
    """Render a parameter value the way the Fitbit API expects it.

    Booleans are lower-case, enums use their value, everything else str().
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def build_params(*pairs: Tuple[str, Any]) -> Params:
    """Build an ordered parameter list, skipping pairs whose value is None."""
    return [(name, format_param_value(value)) for name, value in pairs if value is not None]


def merge_params(base: Optional[Iterable[Tuple[str, Any]]]) -> Params:
    """Normalize caller-supplied parameters into formatted (name, value) pairs."""
    if not base:
        return []
    return [(name, format_param_value(value)) for name, value in base]
