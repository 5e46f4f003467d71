# src/fezancal/features/directions.py
from __future__ import annotations

from typing import Optional, Tuple

from fezancal.features.config import (
    ALL_DIRECTIONS,
    DIRECTION_ABBREVIATIONS,
    DIRECTION_CSS_KEYS,
    DIRECTION_CYCLE_DAYS,
    DIRECTIONS_30_DAYS,
    NO_DIRECTION_ABBREVIATION,
    NO_DIRECTION_CSS_KEY,
    CardinalDirection,
)


def get_direction(lunar_day: int) -> Optional[CardinalDirection]:
    """
    Direction of a lunar cycle day, or None on the rest day (day 7).
    """
    return DIRECTIONS_30_DAYS[(int(lunar_day) - 1) % DIRECTION_CYCLE_DAYS]


def get_all_directions() -> Tuple[CardinalDirection, ...]:
    return ALL_DIRECTIONS


def get_direction_css_key(direction: Optional[CardinalDirection]) -> str:
    if direction is None:
        return NO_DIRECTION_CSS_KEY
    return DIRECTION_CSS_KEYS[CardinalDirection(direction)]


def get_direction_abbreviation(direction: Optional[CardinalDirection]) -> str:
    if direction is None:
        return NO_DIRECTION_ABBREVIATION
    return DIRECTION_ABBREVIATIONS[CardinalDirection(direction)]
