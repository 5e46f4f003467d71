# src/fezancal/core/validation.py
from __future__ import annotations

import math
from datetime import date, datetime, tzinfo
from typing import Any, Optional, Union

from .config import MAX_SUPPORTED_YEAR, MIN_SUPPORTED_YEAR, load_config
from .errors import DateValidationError
from .timeutil import get_tzinfo, local_noon, to_local


def _check_year_range(year: int, value: Any) -> None:
    if year < MIN_SUPPORTED_YEAR or year > MAX_SUPPORTED_YEAR:
        raise DateValidationError(
            f"Year {year} is out of supported range ({MIN_SUPPORTED_YEAR}-{MAX_SUPPORTED_YEAR})",
            value,
        )


def _coerce_date(value: Any) -> Union[date, datetime]:
    if isinstance(value, str):
        s = value.strip()
        try:
            parsed: Union[date, datetime] = datetime.fromisoformat(s) if "T" in s or " " in s else date.fromisoformat(s)
        except ValueError as e:
            err = DateValidationError(f"Invalid date format: {value!r} (expected YYYY-MM-DD)", value)
            raise err from e
        value = parsed

    if isinstance(value, float) and math.isnan(value):
        raise DateValidationError("Date is invalid (NaN)", value)

    if not isinstance(value, (date, datetime)):
        raise DateValidationError(f"Value is not a date (got {type(value).__name__})", value)
    return value


def validate_date(value: Any) -> Union[date, datetime]:
    """
    Validate a calendar input and return it as a date/datetime.

    Accepts date, datetime or an ISO-8601 string ("2025-12-20" or
    "2025-12-20T12:00:00"). Anything else, an unparseable string, or a year
    outside the supported range raises DateValidationError.
    """
    parsed = _coerce_date(value)
    _check_year_range(parsed.year, value)
    return parsed


def validate_local_date(value: Any, tz: tzinfo) -> datetime:
    """
    Validate a calendar input and place it on the tz timeline (see
    timeutil.to_local).

    The supported range applies to the calendar day in tz, so an aware
    instant late on 2100-12-31 UTC that is already 2101 in tz is rejected.
    """
    parsed = _coerce_date(value)
    try:
        local = to_local(parsed, tz)
    except OverflowError as e:
        raise DateValidationError(f"Date {value!r} cannot be placed in {tz}", value) from e
    _check_year_range(local.year, value)
    return local


def validate_year(year: Any) -> int:
    if isinstance(year, bool) or not isinstance(year, int):
        raise DateValidationError(f"Year must be an integer, got {year!r}", year)
    _check_year_range(year, year)
    return year


def validate_month(month: Any) -> int:
    if isinstance(month, bool) or not isinstance(month, int):
        raise DateValidationError(f"Month must be an integer, got {month!r}", month)
    if not (1 <= month <= 12):
        raise DateValidationError(f"Month must be between 1 and 12, got {month}", month)
    return month


def create_valid_date(year: int, month: int, day: int, tz: Optional[str] = None) -> datetime:
    """
    Build local noon of year-month-day after validating every part.
    tz defaults to the configured calendar timezone.
    """
    validate_year(year)
    validate_month(month)
    try:
        d = date(year, month, day)
    except ValueError as e:
        raise DateValidationError(f"Invalid day {day} for {year}-{month:02d}", (year, month, day)) from e

    if tz is None:
        tz = load_config().timezone
    return local_noon(d, get_tzinfo(tz))
