# src/fezancal/features/no_action_days.py
from __future__ import annotations

from typing import Tuple

from fezancal.features.config import NO_ACTION_LUNAR_DAYS


def is_no_action_day(lunar_day: int) -> bool:
    """True on the "ne rien entreprendre" lunar days, whatever the Fezan status."""
    return lunar_day in NO_ACTION_LUNAR_DAYS


def get_no_action_lunar_days() -> Tuple[int, ...]:
    return tuple(sorted(NO_ACTION_LUNAR_DAYS))


def get_no_action_days_count() -> int:
    return len(NO_ACTION_LUNAR_DAYS)
