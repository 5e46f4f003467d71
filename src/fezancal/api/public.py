from __future__ import annotations

import logging
import time
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from fezancal.core.config import MAX_SUPPORTED_YEAR, MIN_SUPPORTED_YEAR, load_config
from fezancal.core.errors import LunarError
from fezancal.core.newmoon import get_new_moons_for_year
from fezancal.core.timeutil import get_tzinfo
from fezancal.core.validation import validate_year
from fezancal.features.config import MoonPhase
from fezancal.features.directions import (
    get_all_directions,
    get_direction_abbreviation,
    get_direction_css_key,
)
from fezancal.features.fezan import get_all_fezan_days
from fezancal.features.forbidden_days import get_all_forbidden_days
from fezancal.features.lunar_day_info import (
    LunarDayResult,
    get_lunar_day_info,
    get_month_lunar_info,
    get_year_lunar_info,
)
from fezancal.features.moon_phase import get_moon_phase_display_name
from fezancal.features.no_action_days import get_no_action_lunar_days

router = APIRouter(prefix="/api/v1", tags=["public"])

log = logging.getLogger("fezancal.api.public")


# ============================================================
# Response Models
# ============================================================
class GregorianDate(BaseModel):
    year: int
    month: int
    day: int
    day_of_week: str


class FezanInfo(BaseModel):
    name: str
    day_number: int = Field(ge=1, le=9)
    status: str
    description: str
    recommendation: str


class DirectionInfo(BaseModel):
    name: Optional[str] = Field(default=None, description="null on the rest day")
    abbreviation: str
    css_key: str


class DayResponse(BaseModel):
    date: date
    gregorian: GregorianDate
    lunar_day: int = Field(ge=1, le=30)
    fezan: FezanInfo
    direction: DirectionInfo
    moon_phase: str
    moon_phase_name: str
    is_new_moon: bool
    is_full_moon: bool
    is_forbidden_day: bool
    forbidden_reason: Optional[str] = None
    is_no_action_day: bool
    new_moon_time: Optional[str] = Field(default=None, description="HH:MM in the calendar timezone")


class MonthResponse(BaseModel):
    year: int
    month: int
    tz: str
    days: List[DayResponse]


class YearResponse(BaseModel):
    year: int
    tz: str
    months: List[List[DayResponse]]


class NewMoonInstant(BaseModel):
    utc: datetime
    local: datetime


class NewMoonsResponse(BaseModel):
    year: int
    tz: str
    new_moons: List[NewMoonInstant]


class ForbiddenDayInfo(BaseModel):
    month: int
    day: int
    reason: Optional[str] = None


class PhaseInfo(BaseModel):
    key: str
    name: str


class LegendResponse(BaseModel):
    fezan: List[FezanInfo]
    directions: List[DirectionInfo]
    forbidden_days: List[ForbiddenDayInfo]
    no_action_lunar_days: List[int]
    moon_phases: List[PhaseInfo]


# ============================================================
# Helpers
# ============================================================
def _parse_iso_date(s: str) -> date:
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid date format: {s} (expected YYYY-MM-DD)") from e


def _http_error(e: LunarError) -> HTTPException:
    return HTTPException(status_code=422, detail=e.to_dict())


def _day_response(r: LunarDayResult) -> DayResponse:
    return DayResponse(
        date=r.date.date(),
        gregorian=GregorianDate(
            year=r.gregorian_year,
            month=r.gregorian_month,
            day=r.gregorian_day,
            day_of_week=r.day_of_week,
        ),
        lunar_day=r.lunar_day,
        fezan=FezanInfo(**r.fezan.to_dict()),
        direction=DirectionInfo(
            name=None if r.direction is None else r.direction.value,
            abbreviation=get_direction_abbreviation(r.direction),
            css_key=get_direction_css_key(r.direction),
        ),
        moon_phase=r.moon_phase.value,
        moon_phase_name=get_moon_phase_display_name(r.moon_phase),
        is_new_moon=r.is_new_moon,
        is_full_moon=r.is_full_moon,
        is_forbidden_day=r.is_forbidden_day,
        forbidden_reason=r.forbidden_reason,
        is_no_action_day=r.is_no_action_day,
        new_moon_time=r.new_moon_time,
    )


# ============================================================
# Endpoints
# ============================================================
@router.get("/day", response_model=DayResponse)
def get_day(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
) -> DayResponse:
    d = _parse_iso_date(date_str)
    try:
        return _day_response(get_lunar_day_info(d))
    except LunarError as e:
        raise _http_error(e) from e


@router.get("/month", response_model=MonthResponse)
def get_month(
    year: int = Query(..., description="Gregorian year"),
    month: int = Query(..., description="1..12"),
    timing: bool = Query(False, description="log timing (diagnostics)"),
) -> MonthResponse:
    t0 = time.perf_counter()
    try:
        rows = get_month_lunar_info(year, month)
    except LunarError as e:
        raise _http_error(e) from e
    t1 = time.perf_counter()

    if timing:
        log.warning("timing /month year=%d month=%d days=%d total=%.3fs", year, month, len(rows), t1 - t0)

    return MonthResponse(
        year=year,
        month=month,
        tz=load_config().timezone,
        days=[_day_response(r) for r in rows],
    )


@router.get("/year", response_model=YearResponse)
def get_year(
    year: int = Query(..., description="Gregorian year"),
    timing: bool = Query(False, description="log timing (diagnostics)"),
) -> YearResponse:
    t0 = time.perf_counter()
    try:
        months = get_year_lunar_info(year)
    except LunarError as e:
        raise _http_error(e) from e
    t1 = time.perf_counter()

    if timing:
        log.warning("timing /year year=%d total=%.3fs", year, t1 - t0)

    return YearResponse(
        year=year,
        tz=load_config().timezone,
        months=[[_day_response(r) for r in rows] for rows in months],
    )


@router.get("/new-moons", response_model=NewMoonsResponse)
def get_new_moons(
    year: int = Query(..., ge=MIN_SUPPORTED_YEAR, le=MAX_SUPPORTED_YEAR),
) -> NewMoonsResponse:
    tz_name = load_config().timezone
    tzinfo = get_tzinfo(tz_name)
    try:
        validate_year(year)
        moons = get_new_moons_for_year(year, tzinfo)
    except LunarError as e:
        raise _http_error(e) from e

    return NewMoonsResponse(
        year=year,
        tz=tz_name,
        new_moons=[NewMoonInstant(utc=m, local=m.astimezone(tzinfo)) for m in moons],
    )


@router.get("/legend", response_model=LegendResponse)
def get_legend() -> LegendResponse:
    return LegendResponse(
        fezan=[FezanInfo(**f.to_dict()) for f in get_all_fezan_days()],
        directions=[
            DirectionInfo(
                name=d.value,
                abbreviation=get_direction_abbreviation(d),
                css_key=get_direction_css_key(d),
            )
            for d in get_all_directions()
        ],
        forbidden_days=[ForbiddenDayInfo(**r.to_dict()) for r in get_all_forbidden_days()],
        no_action_lunar_days=list(get_no_action_lunar_days()),
        moon_phases=[PhaseInfo(key=p.value, name=get_moon_phase_display_name(p)) for p in MoonPhase],
    )
