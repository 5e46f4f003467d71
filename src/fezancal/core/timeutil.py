# src/fezancal/core/timeutil.py
from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from functools import lru_cache
from typing import Union

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

UTC = timezone.utc

DateLike = Union[date, datetime]


def as_utc(dt: datetime) -> datetime:
    """
    Return dt as an aware UTC datetime.

    Naive datetimes are taken to be UT already (astronomical convention);
    aware ones are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


@lru_cache(maxsize=16)
def get_tzinfo(tz: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz)
    except ZoneInfoNotFoundError as e:
        raise ValueError(f"Unknown timezone: {tz}") from e


def local_noon(d: date, tz: tzinfo) -> datetime:
    return datetime.combine(d, time(12, 0), tzinfo=tz)


def to_local(value: DateLike, tz: tzinfo) -> datetime:
    """
    Place a calendar value on the local timeline.

    - date           -> local noon of that day
    - naive datetime -> same wall clock in tz
    - aware datetime -> converted to tz
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz)
        return value.astimezone(tz)
    return local_noon(value, tz)


def calendar_date(value: DateLike) -> date:
    """Calendar date of a date/datetime (wall clock, time-of-day dropped)."""
    if isinstance(value, datetime):
        return value.date()
    return value
