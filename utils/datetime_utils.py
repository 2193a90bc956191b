from __future__ import annotations

from datetime import datetime, timezone, timedelta
from typing import Optional


def utc_now() -> datetime:
    """Capture the current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_canvas_datetime(value: str) -> datetime:
    """
    Parse Canvas ISO8601 datetime strings into timezone-aware datetimes.
    Canvas typically returns UTC with 'Z'. Example: '2025-10-01T03:59:00Z'.
    """
    if not value:
        raise ValueError("Empty datetime string")
    # Normalize trailing Z to +00:00 for fromisoformat
    normalized = value.replace("Z", "+00:00")
    dt = datetime.fromisoformat(normalized)
    # Naive timestamps are UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_utc_iso_z(dt: datetime) -> str:
    """Convert any datetime to a UTC ISO8601 string with trailing 'Z'."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc)
    # timespec='seconds' matches the precision Canvas uses
    return dt_utc.isoformat(timespec="seconds").replace("+00:00", "Z")


def format_due_date(dt: Optional[datetime]) -> str:
    """Render a due date as its UTC calendar day, e.g. '2025-10-01'."""
    if dt is None:
        return "No due date"
    return to_utc_iso_z(dt)[:10]


def within_days(dt: datetime, start: datetime, days: int) -> bool:
    """True when dt falls in the closed window [start, start + days]."""
    return start <= dt <= start + timedelta(days=days)
