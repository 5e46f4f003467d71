# src/fezancal/core/lunar_day.py
from __future__ import annotations

"""
Position within the traditional 30-day cycle.

The cycle is a fixed 30-day cadence counted from one observed anchor
(AnchorConfig). It does not follow the real new moon, which drifts against
a 30-day count by roughly half a day per month; the anchor is recalibrated
by hand when the reference calendar says so.
"""

from datetime import date, datetime
from typing import Optional

from .config import AnchorConfig
from .timeutil import calendar_date

LUNAR_CYCLE_DAYS = 30

DEFAULT_ANCHOR = AnchorConfig()


def days_from_anchor(d: date | datetime, anchor: AnchorConfig = DEFAULT_ANCHOR) -> int:
    """Whole calendar days from the anchor date to d (negative before it)."""
    return (calendar_date(d) - anchor.reference_date).days


def get_lunar_day_of_month(d: date | datetime, anchor: Optional[AnchorConfig] = None) -> int:
    """
    Lunar cycle day 1..30 for the calendar date of d.

    Time-of-day is ignored: any instant of 2025-12-20 is day 1 with the
    default anchor, 2026-01-19 is day 1 again.
    """
    anchor = anchor or DEFAULT_ANCHOR
    diff = days_from_anchor(d, anchor)
    lunar = (anchor.reference_lunar_day - 1 + diff) % LUNAR_CYCLE_DAYS
    return lunar + 1
