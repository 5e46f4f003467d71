# src/fezancal/features/fezan.py
from __future__ import annotations

from dataclasses import replace
from typing import Tuple

from fezancal.features.config import FAVORABLE, FEZAN_CYCLE_DAYS, FEZAN_DAYS, FezanDay


def _fezan_index(lunar_day: int) -> int:
    return (int(lunar_day) - 1) % FEZAN_CYCLE_DAYS


def get_fezan_day(lunar_day: int) -> FezanDay:
    """
    Fezan entry of a lunar cycle day.

    Day 1 = Mêdjo, day 9 = Fâ, day 10 = Mêdjo again. Returns a fresh record
    so the shared table is never handed out.
    """
    return replace(FEZAN_DAYS[_fezan_index(lunar_day)])


def is_favorable(fezan: FezanDay) -> bool:
    return fezan.status == FAVORABLE


def get_all_fezan_days() -> Tuple[FezanDay, ...]:
    return tuple(replace(f) for f in FEZAN_DAYS)


def get_fezan_name(day_number: int) -> str:
    return FEZAN_DAYS[_fezan_index(day_number)].name


def get_fezan_status(day_number: int) -> str:
    return FEZAN_DAYS[_fezan_index(day_number)].status
