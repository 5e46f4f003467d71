# src/fezancal/features/forbidden_days.py
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Tuple

from fezancal.features.config import (
    FORBIDDEN_DAY_KEYS,
    FORBIDDEN_DAYS,
    FORBIDDEN_REASON_BY_KEY,
    ForbiddenDayRule,
)


def _key(d: date | datetime) -> str:
    return f"{d.month}-{d.day}"


def is_forbidden_day(d: date | datetime) -> bool:
    """
    True if the month/day of d is in the fixed table (year ignored).
    """
    return _key(d) in FORBIDDEN_DAY_KEYS


def get_forbidden_day_reason(d: date | datetime) -> Optional[str]:
    return FORBIDDEN_REASON_BY_KEY.get(_key(d))


def get_all_forbidden_days() -> Tuple[ForbiddenDayRule, ...]:
    return FORBIDDEN_DAYS


def add_custom_forbidden_days(custom: Iterable[ForbiddenDayRule]) -> Tuple[ForbiddenDayRule, ...]:
    """
    Built-in rules followed by custom ones, as a new tuple.
    The built-in table is left untouched.
    """
    extra = tuple(custom)
    for rule in extra:
        if not (1 <= rule.month <= 12) or not (1 <= rule.day <= 31):
            raise ValueError(f"invalid forbidden day rule: {rule!r}")
    return FORBIDDEN_DAYS + extra
