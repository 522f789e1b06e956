"""Timestamps — ISO-8601 parsing and the canonical stored representation.

Invariants:
    - Every parsed datetime is timezone-aware UTC (offset-less input is read as UTC)
    - format_timestamp() output is fixed-width for a given timespec, so lexicographic
      order of stored strings equals chronological order

Design Decisions:
    - Millisecond "Z" form for event dates matches what JavaScript clients send and
      parse (Date.toISOString)
    - Microsecond form for server timestamps so successive writes stay ordered
"""

from datetime import datetime, timezone


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 date or date-time string into an aware UTC datetime.

    Raises ValueError for anything that is not an ISO-8601 string.
    """
    if not isinstance(value, str):
        raise ValueError("expected an ISO-8601 string")
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on round-trip)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime, timespec: str = "milliseconds") -> str:
    """Render a datetime as fixed-width UTC ISO-8601 with a trailing Z."""
    rendered = ensure_utc(value).isoformat(timespec=timespec)
    return rendered.replace("+00:00", "Z")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
