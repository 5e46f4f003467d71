# src/fezancal/core/julian.py
from __future__ import annotations

"""
Gregorian <-> Julian Day conversion (Meeus, Astronomical Algorithms ch. 7).

JD values are on the UT timeline: naive datetimes are read as UT, aware
datetimes are converted to UTC first. julian_day_to_date always returns an
aware UTC datetime.
"""

import math
from datetime import date, datetime, timedelta

from .timeutil import UTC, as_utc

GREGORIAN_REFORM_JD = 2299161
SECONDS_PER_DAY = 86400.0


def date_to_julian_day(d: date | datetime) -> float:
    """
    Julian Day of a calendar instant, time-of-day as a fractional day.
    A plain date is taken at 00:00 UT.
    """
    if isinstance(d, datetime):
        dt = as_utc(d)
    else:
        dt = datetime(d.year, d.month, d.day, tzinfo=UTC)

    seconds = dt.hour * 3600 + dt.minute * 60 + dt.second + dt.microsecond / 1e6
    day = dt.day + seconds / SECONDS_PER_DAY

    y, m = dt.year, dt.month
    if m <= 2:
        y -= 1
        m += 12

    a = math.floor(y / 100)
    b = 2 - a + math.floor(a / 4)

    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + day + b - 1524.5


def julian_day_to_date(jd: float) -> datetime:
    """
    Inverse of date_to_julian_day, rounded to the nearest second.

    Raises ValueError for non-finite input.
    """
    if not math.isfinite(jd):
        raise ValueError(f"julian day must be finite, got {jd!r}")

    z = math.floor(jd + 0.5)
    f = (jd + 0.5) - z

    a = z
    if z >= GREGORIAN_REFORM_JD:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.floor(alpha / 4)

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    # timedelta carries 86400 s into the next day
    return datetime(year, month, day, tzinfo=UTC) + timedelta(seconds=round(f * SECONDS_PER_DAY))


def current_julian_day() -> float:
    return date_to_julian_day(datetime.now(UTC))
