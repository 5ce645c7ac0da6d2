"""Business-timezone helpers.

Timestamps are stored in UTC. Reports bucket by the calendar date in the
organization's local timezone, so every comparison against a report date goes
through these helpers.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo


def to_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps, convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_business_local(value: datetime, tz_name: str) -> datetime:
    return to_utc(value).astimezone(ZoneInfo(tz_name))


def business_date(value: datetime, tz_name: str) -> date:
    return to_business_local(value, tz_name).date()


def today_in(tz_name: str) -> date:
    return datetime.now(ZoneInfo(tz_name)).date()


def window_bounds(start: date, end: date, tz_name: str) -> tuple[datetime, datetime]:
    """UTC half-open bounds [start 00:00 local, (end + 1) 00:00 local).

    Covers every instant of the local days start..end inclusive, including
    fractional seconds after 23:59:59.
    """
    if end < start:
        raise ValueError(f"Window end {end} is before start {start}")
    zone = ZoneInfo(tz_name)
    lower = datetime.combine(start, time.min, tzinfo=zone)
    upper = datetime.combine(end + timedelta(days=1), time.min, tzinfo=zone)
    return lower.astimezone(timezone.utc), upper.astimezone(timezone.utc)


def parse_timestamp(value: object) -> datetime | None:
    """Accept a datetime or an ISO-8601 string; anything else yields None."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None
