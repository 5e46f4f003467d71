# src/fezancal/core/newmoon.py
from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, tzinfo
from typing import Callable, List, Optional

from .errors import LunarCalculationError
from .julian import date_to_julian_day, julian_day_to_date
from .timeutil import UTC

log = logging.getLogger(__name__)

# lunation 0 = new moon of 2000-01-06 (Meeus ch. 49)
K0_JDE = 2451550.09766
SYNODIC_MONTH_DAYS = 29.530588861

# julian_day_to_date rounds to whole seconds, so a returned new moon fed
# back in may sit up to half a second before the exact instant.
TIE_TOLERANCE_DAYS = 1.0 / 86400.0

# k from the linear estimate is off by at most one lunation in practice
_MAX_K_STEPS = 3

_RAD = math.pi / 180.0


def calculate_k(jd: float) -> float:
    """Approximate (fractional) lunation number for a Julian Day."""
    year = 2000 + (jd - 2451550.09765) / 365.25
    return (year - 2000) * 12.3685


def _periodic_corrections(k: float, t: float) -> float:
    t2 = t * t
    t3 = t2 * t
    t4 = t3 * t

    # Sun mean anomaly, Moon mean anomaly, Moon argument of latitude, node
    m = (2.5534 + 29.10535670 * k - 0.0000014 * t2 - 0.00000011 * t3) * _RAD
    mp = (201.5643 + 385.81693528 * k + 0.0107582 * t2 + 0.00001238 * t3 - 0.000000058 * t4) * _RAD
    f = (160.7108 + 390.67050284 * k - 0.0016118 * t2 - 0.00000227 * t3 + 0.000000011 * t4) * _RAD
    om = (124.7746 - 1.56375588 * k + 0.0020672 * t2 + 0.00000215 * t3) * _RAD

    sin = math.sin
    c = 0.0
    c -= 0.40720 * sin(mp)
    c += 0.17241 * sin(m)
    c += 0.01608 * sin(2 * mp)
    c += 0.01039 * sin(2 * f)
    c += 0.00739 * sin(mp - m)
    c -= 0.00514 * sin(mp + m)
    c += 0.00208 * sin(2 * m)
    c -= 0.00111 * sin(mp - 2 * f)
    c -= 0.00057 * sin(mp + 2 * f)
    c += 0.00056 * sin(2 * mp + m)
    c -= 0.00042 * sin(3 * mp)
    c += 0.00042 * sin(m + 2 * f)
    c += 0.00038 * sin(m - 2 * f)
    c -= 0.00024 * sin(2 * mp - m)
    c -= 0.00017 * sin(om)
    c -= 0.00007 * sin(mp + 2 * m)
    c += 0.00004 * sin(2 * mp - 2 * f)
    c += 0.00004 * sin(3 * m)
    c += 0.00003 * sin(mp + m - 2 * f)
    c += 0.00003 * sin(2 * mp + 2 * f)
    c -= 0.00003 * sin(mp + m + 2 * f)
    c += 0.00003 * sin(mp - m + 2 * f)
    c -= 0.00002 * sin(mp - m - 2 * f)
    c -= 0.00002 * sin(3 * mp + m)
    c += 0.00002 * sin(4 * mp)

    # planetary arguments A1..A14 as (amplitude, phase deg, rate deg/lunation)
    planetary = (
        (0.000325, 299.77 - 0.009173 * t2, 0.107408),
        (0.000165, 251.88, 0.016321),
        (0.000164, 251.83, 26.651886),
        (0.000126, 349.42, 36.412478),
        (0.000110, 84.66, 18.206239),
        (0.000062, 141.74, 53.303771),
        (0.000060, 207.14, 2.453732),
        (0.000056, 154.84, 7.306860),
        (0.000047, 34.52, 27.261239),
        (0.000042, 207.19, 0.121824),
        (0.000040, 291.34, 1.844379),
        (0.000037, 161.72, 24.198154),
        (0.000035, 239.56, 25.513099),
        (0.000023, 331.55, 3.592518),
    )
    for amp, a0, rate in planetary:
        c += amp * sin((a0 + rate * k) * _RAD)

    return c


def calculate_new_moon_jd(k: float) -> float:
    """
    Julian Day (JDE) of the new moon of lunation k.
    Mean phase polynomial plus the periodic corrections, ~2 min accuracy.
    """
    t = k / 1236.85
    jde = (
        K0_JDE
        + SYNODIC_MONTH_DAYS * k
        + 0.00015437 * t * t
        - 0.000000150 * t * t * t
        + 0.00000000073 * t * t * t * t
    )
    return jde + _periodic_corrections(k, t)


def _wrap(what: str, dt: datetime, fn: Callable[[], datetime]) -> datetime:
    try:
        return fn()
    except (ArithmeticError, ValueError) as e:
        log.exception("%s failed: date=%s", what, dt)
        raise LunarCalculationError(f"Failed to calculate {what}", dt, e) from e


def _finite(jd: float) -> float:
    if not math.isfinite(jd):
        raise ValueError(f"non-finite new moon JD: {jd!r}")
    return jd


def find_previous_new_moon(dt: datetime) -> datetime:
    """
    Latest new moon at or before dt (UTC-aware result).
    An input within a second of a new moon returns that new moon.
    """

    def run() -> datetime:
        jd = date_to_julian_day(dt)
        limit = jd + TIE_TOLERANCE_DAYS
        k = math.floor(calculate_k(jd))

        nm = _finite(calculate_new_moon_jd(k))
        for _ in range(_MAX_K_STEPS):
            if nm <= limit:
                break
            k -= 1
            nm = _finite(calculate_new_moon_jd(k))
        for _ in range(_MAX_K_STEPS):
            nxt = _finite(calculate_new_moon_jd(k + 1))
            if nxt > limit:
                break
            k, nm = k + 1, nxt

        return julian_day_to_date(nm)

    return _wrap("previous new moon", dt, run)


def find_next_new_moon(dt: datetime) -> datetime:
    """
    Earliest new moon strictly after dt (UTC-aware result).
    """

    def run() -> datetime:
        jd = date_to_julian_day(dt)
        limit = jd + TIE_TOLERANCE_DAYS
        k = math.floor(calculate_k(jd))

        nm = _finite(calculate_new_moon_jd(k))
        for _ in range(_MAX_K_STEPS):
            if nm > limit:
                break
            k += 1
            nm = _finite(calculate_new_moon_jd(k))
        for _ in range(_MAX_K_STEPS):
            prev = _finite(calculate_new_moon_jd(k - 1))
            if prev <= limit:
                break
            k, nm = k - 1, prev

        return julian_day_to_date(nm)

    return _wrap("next new moon", dt, run)


def get_new_moons_for_year(year: int, tz: Optional[tzinfo] = None) -> List[datetime]:
    """
    All new moons whose instant falls in the calendar year (in tz, UTC by
    default). Returns 12 or 13 strictly increasing UTC datetimes.
    """
    tz = tz or UTC
    start = datetime(year, 1, 1, tzinfo=tz)
    end = datetime(year + 1, 1, 1, tzinfo=tz) - timedelta(seconds=1)

    current = find_previous_new_moon(start)
    if current < start:
        current = find_next_new_moon(current)

    out: List[datetime] = []
    while current <= end:
        out.append(current)
        current = find_next_new_moon(current)

    log.debug("new moons for %d: %d", year, len(out))
    return out
