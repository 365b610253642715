# courtside/services/dates.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo

PACIFIC = ZoneInfo("America/Los_Angeles")

TzLike = Union[str, ZoneInfo]


def _zone(tz: Optional[TzLike]) -> ZoneInfo:
    if tz is None:
        return PACIFIC
    return tz if isinstance(tz, ZoneInfo) else ZoneInfo(tz)


def parse_start(value: Optional[str]) -> Optional[datetime]:
    """ISO timestamp -> aware datetime (naive values are taken as UTC)."""
    if not value or not isinstance(value, str):
        return None
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def local_date(now: datetime, tz: Optional[TzLike] = None) -> str:
    """Calendar date of `now` in the reference timezone, as YYYY-MM-DD."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(_zone(tz)).date().isoformat()


def today_and_tomorrow(now: datetime, tz: Optional[TzLike] = None) -> Tuple[str, str]:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    today = now.astimezone(_zone(tz)).date()
    return today.isoformat(), (today + timedelta(days=1)).isoformat()


def fixture_date_key(start: Optional[str], tz: Optional[TzLike] = None) -> str:
    """
    Grouping key for a fixture: its local calendar date. Unparseable
    timestamps fall back to whatever precedes the 'T'.
    """
    dt = parse_start(start)
    if dt is not None:
        return local_date(dt, tz)
    if isinstance(start, str):
        return start.split("T")[0]
    return ""


def _clock(dt: datetime) -> str:
    # "4:00 PM" (no zero padding on the hour)
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"


def format_start_time(start: Optional[str], tz: Optional[TzLike] = None) -> str:
    dt = parse_start(start)
    if dt is None:
        return ""
    return _clock(dt.astimezone(_zone(tz)))


def format_last_updated(now: datetime, tz: Optional[TzLike] = None) -> str:
    """e.g. '10/18/2026, 4:05:09 PM'"""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(_zone(tz))
    hour = local.hour % 12 or 12
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {'AM' if local.hour < 12 else 'PM'}"
    )


def tz_label(now: datetime, tz: Optional[TzLike] = None) -> str:
    """Abbreviation in effect at `now`, e.g. 'PDT' / 'PST'."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(_zone(tz)).tzname() or ""
