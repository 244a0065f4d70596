from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Store timezone by IANA name; empty / "UTC" -> UTC."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def store_now(tz: tzinfo) -> datetime:
    """Server-side 'now' as an aware datetime in the store's timezone."""
    return datetime.now(tz)


def to_epoch_millis(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def format_receipt_date(dt: datetime) -> str:
    """Long receipt date, e.g. "October 18, 2026"."""
    return f"{dt:%B} {dt.day}, {dt.year}"


def format_receipt_time(dt: datetime) -> str:
    """Receipt clock time, e.g. "09:45 AM"."""
    return dt.strftime("%I:%M %p")


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a calendar date from a query string or stored receipt date.

    - None / "" -> None
    - "YYYY-MM-DD" -> date
    - full ISO-8601 datetimes -> their date part
    - "October 18, 2026" (receipt format) -> date

    Raises ValueError for anything else.
    """
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None

    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        pass

    return datetime.strptime(s, "%B %d, %Y").date()


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt_utc.isoformat().replace("+00:00", "Z")
