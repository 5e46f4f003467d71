# src/fezancal/features/lunar_day_info.py
from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

from fezancal.core.cache import LRUCache, date_to_key
from fezancal.core.config import FezanConfig, load_config
from fezancal.core.errors import DateValidationError, LunarCalculationError
from fezancal.core.lunar_day import get_lunar_day_of_month
from fezancal.core.newmoon import find_next_new_moon, find_previous_new_moon
from fezancal.core.timeutil import get_tzinfo, local_noon
from fezancal.core.validation import validate_local_date, validate_month, validate_year
from fezancal.features.config import DAYS_OF_WEEK_FR, CardinalDirection, FezanDay, MoonPhase
from fezancal.features.directions import get_direction
from fezancal.features.fezan import get_fezan_day
from fezancal.features.forbidden_days import get_forbidden_day_reason
from fezancal.features.moon_phase import (
    illumination_phase,
    is_full_moon_fraction,
    is_new_moon_fraction,
    moon_phase_from_fraction,
)
from fezancal.features.no_action_days import is_no_action_day

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LunarDayResult:
    """
    Everything the calendar shows for one day.

    Frozen: derived once from (date, static tables, anchor) and shared
    through the cache, so it must never be mutated.
    """
    date: datetime                          # instant used, in the calendar tz
    gregorian_year: int
    gregorian_month: int
    gregorian_day: int
    day_of_week: str                        # Lundi..Dimanche
    lunar_day: int                          # 1..30
    fezan: FezanDay
    direction: Optional[CardinalDirection]  # None on the rest day
    moon_phase: MoonPhase
    is_new_moon: bool
    is_full_moon: bool
    is_forbidden_day: bool
    forbidden_reason: Optional[str] = None
    is_no_action_day: bool = False
    new_moon_time: Optional[str] = None     # "HH:MM" local, only on new moon days

    @property
    def is_favorable(self) -> bool:
        return self.fezan.is_favorable

    def to_dict(self) -> dict:
        return {
            "date": self.date.date().isoformat(),
            "gregorian": {
                "year": self.gregorian_year,
                "month": self.gregorian_month,
                "day": self.gregorian_day,
                "day_of_week": self.day_of_week,
            },
            "lunar_day": self.lunar_day,
            "fezan": self.fezan.to_dict(),
            "direction": None if self.direction is None else self.direction.value,
            "moon_phase": self.moon_phase.value,
            "is_new_moon": self.is_new_moon,
            "is_full_moon": self.is_full_moon,
            "is_forbidden_day": self.is_forbidden_day,
            "forbidden_reason": self.forbidden_reason,
            "is_no_action_day": self.is_no_action_day,
            "new_moon_time": self.new_moon_time,
        }


_cfg = load_config()
lunar_day_cache: LRUCache[LunarDayResult] = LRUCache(
    max_size=_cfg.cache.max_size,
    ttl_seconds=_cfg.cache.ttl_seconds,
)


def _new_moon_time(local: datetime, phase: float, cfg: FezanConfig) -> str:
    # flagged on the eve of the conjunction: it is still ahead
    if phase > cfg.phase.flag_new_above:
        exact = find_next_new_moon(local)
    else:
        exact = find_previous_new_moon(local)
    return exact.astimezone(get_tzinfo(cfg.timezone)).strftime("%H:%M")


def compute_lunar_day_info(local: datetime, cfg: Optional[FezanConfig] = None) -> LunarDayResult:
    """
    Uncached resolver. local must be an aware datetime on the calendar
    timezone and already validated.
    """
    cfg = cfg or load_config()

    lunar_day = get_lunar_day_of_month(local, cfg.anchor)
    phase = illumination_phase(local)
    new_moon = is_new_moon_fraction(phase, cfg.phase)
    reason = get_forbidden_day_reason(local)

    return LunarDayResult(
        date=local,
        gregorian_year=local.year,
        gregorian_month=local.month,
        gregorian_day=local.day,
        day_of_week=DAYS_OF_WEEK_FR[local.weekday()],
        lunar_day=lunar_day,
        fezan=get_fezan_day(lunar_day),
        direction=get_direction(lunar_day),
        moon_phase=moon_phase_from_fraction(phase, cfg.phase),
        is_new_moon=new_moon,
        is_full_moon=is_full_moon_fraction(phase, cfg.phase),
        is_forbidden_day=reason is not None,
        forbidden_reason=reason,
        is_no_action_day=is_no_action_day(lunar_day),
        new_moon_time=_new_moon_time(local, phase, cfg) if new_moon else None,
    )


def get_lunar_day_info(value: Any) -> LunarDayResult:
    """
    Lunar information for one day (cached per calendar day).

    value: date (taken at local noon), datetime (naive = calendar tz wall
    clock) or ISO string. Raises DateValidationError for bad input or a
    local calendar day outside 1900..2100, LunarCalculationError for
    anything else.
    """
    cfg = load_config()
    local = validate_local_date(value, get_tzinfo(cfg.timezone))
    key = date_to_key(local)

    try:
        return lunar_day_cache.get_or_compute(key, lambda: compute_lunar_day_info(local, cfg))
    except LunarCalculationError:
        raise
    except Exception as e:
        log.exception("lunar day calculation failed: date=%s", local)
        raise LunarCalculationError("Failed to calculate lunar day info", local, e) from e


def get_today_lunar_info() -> LunarDayResult:
    tz = get_tzinfo(load_config().timezone)
    return get_lunar_day_info(datetime.now(tz))


def get_month_lunar_info(year: int, month: int) -> List[LunarDayResult]:
    """
    One result per calendar day of year-month (at local noon), in order.
    """
    validate_year(year)
    validate_month(month)
    tz = get_tzinfo(load_config().timezone)

    out: List[LunarDayResult] = []
    for day in range(1, calendar.monthrange(year, month)[1] + 1):
        d = local_noon(date(year, month, day), tz)
        try:
            out.append(get_lunar_day_info(d))
        except DateValidationError:
            raise
        except LunarCalculationError as e:
            raise LunarCalculationError(
                f"Failed to calculate lunar info for {year}-{month:02d}-{day:02d}", d, e
            ) from e
    return out


def get_year_lunar_info(year: int) -> List[List[LunarDayResult]]:
    validate_year(year)
    return [get_month_lunar_info(year, month) for month in range(1, 13)]


def next_month(year: int, month: int) -> Tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def previous_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1
