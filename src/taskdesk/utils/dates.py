"""Date and time helpers.

Timestamps are timezone-aware UTC. "Today" for due-date comparisons is the
current UTC calendar date, formatted the same way as due dates.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta


def now() -> datetime:
    """Get the current timestamp in UTC."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Get the current calendar date in UTC."""
    return now().date()


def date_key(day: date, offset_days: int = 0) -> str:
    """Format a date (optionally shifted) as ``YYYY-MM-DD``.

    Due dates are plain strings, so comparisons against "today" are done on
    this representation.
    """
    return (day + timedelta(days=offset_days)).isoformat()


def format_local(value: datetime) -> str:
    """Render a timestamp in the machine's local timezone."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")
