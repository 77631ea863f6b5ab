"""Time-related helpers, Bogotá local time (UTC-5, no DST)."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

__all__ = [
    "TZ_COT",
    "format_cot_iso",
    "today_in_cot",
    "parse_iso_date",
]


TZ_COT = timezone(timedelta(hours=-5))


def format_cot_iso(dt: datetime | None) -> str | None:
    """Convert a datetime to an ISO8601 string in Bogotá time."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(TZ_COT).isoformat()


def today_in_cot(now: datetime | None = None) -> date:
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return current.astimezone(TZ_COT).date()


def parse_iso_date(value: str | None) -> date | None:
    """Parse ``YYYY-MM-DD``; ``None`` for blank input, ``ValueError`` when malformed."""
    if value is None:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    return datetime.strptime(trimmed, "%Y-%m-%d").date()
