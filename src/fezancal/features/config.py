# src/fezancal/features/config.py
from __future__ import annotations

"""
Feature-level constants (static rule tables).

- Fezan: 9-day status cycle, index (lunar_day - 1) % 9
- directions: 30-slot table, index (lunar_day - 1) % 30, slot 7 has none
- forbidden days: fixed month/day pairs, year-independent
- no-action days: lunar cycle days where nothing important is started
- moon phases: the 8 buckets and their display names

Everything here is read-only: tuples, frozensets and MappingProxyType.
Accessors hand out copies / immutable records only.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

# ============================================================
# Fezan cycle (9 days)
#   Source: traditional Fezan calendar of Benin.
#   The cycle restarts on lunar day 1 (and on 10, 19, 28).
# ============================================================

FAVORABLE = "favorable"
UNFAVORABLE = "unfavorable"


@dataclass(frozen=True)
class FezanDay:
    name: str
    day_number: int   # 1..9
    status: str       # "favorable" | "unfavorable"
    description: str
    recommendation: str

    @property
    def is_favorable(self) -> bool:
        return self.status == FAVORABLE

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "day_number": self.day_number,
            "status": self.status,
            "description": self.description,
            "recommendation": self.recommendation,
        }


FEZAN_DAYS: Tuple[FezanDay, ...] = (
    FezanDay(
        "Mêdjo", 1, FAVORABLE,
        "Jour de la naissance, point de départ de la vie",
        "Excellent pour entreprendre quelque chose d'important, surtout un jeudi",
    ),
    FezanDay(
        "Mêkou", 2, UNFAVORABLE,
        "Jour de la mort, jour de malheur",
        "Éviter les événements importants. Adapté pour les enterrements ou sacrifices aux défunts",
    ),
    FezanDay(
        "Vodoun", 3, FAVORABLE,
        "Jour du sacré, jour vaudou",
        "Recommandé pour les cérémonies cultuelles, surtout un dimanche",
    ),
    FezanDay(
        "Azon", 4, UNFAVORABLE,
        "Jour de la maladie",
        "Mauvais jour, éviter les décisions importantes",
    ),
    FezanDay(
        "Vo", 5, FAVORABLE,
        "Jour du sacrifice",
        "Favorable pour conjurer le mauvais sort ou rompre un maléfice",
    ),
    FezanDay(
        "Akoue", 6, UNFAVORABLE,
        "Jour du jugement",
        "Risque de disputes, conflits et menaces. À éviter",
    ),
    FezanDay(
        "Bô", 7, FAVORABLE,
        "Jour du sort (bon ou mauvais)",
        "Propice pour jeter des sorts ou maléfices, surtout un mardi",
    ),
    FezanDay(
        "Hin", 8, UNFAVORABLE,
        "Jour de la misère",
        "Déconseillé d'entreprendre quelque chose d'important",
    ),
    FezanDay(
        "Fâ", 9, FAVORABLE,
        "Jour de l'oracle",
        "Jour parfait pour consulter l'oracle et comprendre les malheurs",
    ),
)

FEZAN_CYCLE_DAYS = len(FEZAN_DAYS)


# ============================================================
# Cardinal directions (30-day table)
#   Read off the handwritten reference calendar, Dec 2025 - Jan 2026
#   (day 1 = 2025-12-20). Day 7 carries no direction (rest day).
# ============================================================

class CardinalDirection(str, Enum):
    NORTH = "Nord"
    NORTH_EAST = "Nord-Est"
    EAST = "Est"
    SOUTH_EAST = "Sud-Est"
    SOUTH = "Sud"
    SOUTH_WEST = "Sud-Ouest"
    WEST = "Ouest"
    NORTH_WEST = "Nord-Ouest"

    def __str__(self) -> str:
        return self.value


_N = CardinalDirection.NORTH
_NE = CardinalDirection.NORTH_EAST
_E = CardinalDirection.EAST
_SE = CardinalDirection.SOUTH_EAST
_S = CardinalDirection.SOUTH
_SW = CardinalDirection.SOUTH_WEST
_W = CardinalDirection.WEST
_NW = CardinalDirection.NORTH_WEST

DIRECTIONS_30_DAYS: Tuple[Optional[CardinalDirection], ...] = (
    _S,    # 1   20 déc
    _NW,   # 2
    _E,    # 3
    _N,    # 4
    _NE,   # 5
    _E,    # 6
    None,  # 7   jour de repos
    _W,    # 8
    _S,    # 9
    _NW,   # 10
    _W,    # 11
    _N,    # 12
    _N,    # 13  1 jan
    _SE,   # 14
    _NE,   # 15
    _S,    # 16
    _NW,   # 17
    _SW,   # 18
    _W,    # 19
    _N,    # 20
    _E,    # 21
    _SE,   # 22
    _NE,   # 23
    _S,    # 24
    _W,    # 25
    _SW,   # 26
    _NW,   # 27
    _E,    # 28
    _SE,   # 29
    _NE,   # 30  18 jan, nouvelle lune 19h43
)

DIRECTION_CYCLE_DAYS = len(DIRECTIONS_30_DAYS)
REST_DAY_SLOT = 7

ALL_DIRECTIONS: Tuple[CardinalDirection, ...] = tuple(CardinalDirection)

DIRECTION_CSS_KEYS: Mapping[CardinalDirection, str] = MappingProxyType({
    _N: "north",
    _NE: "north-east",
    _E: "east",
    _SE: "south-east",
    _S: "south",
    _SW: "south-west",
    _W: "west",
    _NW: "north-west",
})

DIRECTION_ABBREVIATIONS: Mapping[CardinalDirection, str] = MappingProxyType({
    _N: "N",
    _NE: "NE",
    _E: "E",
    _SE: "SE",
    _S: "S",
    _SW: "SO",
    _W: "O",
    _NW: "NO",
})

NO_DIRECTION_CSS_KEY = "neutral"
NO_DIRECTION_ABBREVIATION = "-"


# ============================================================
# Forbidden days (45 fixed month/day pairs, any year)
# ============================================================

@dataclass(frozen=True)
class ForbiddenDayRule:
    month: int   # 1..12
    day: int
    reason: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.month}-{self.day}"

    def to_dict(self) -> dict:
        return {"month": self.month, "day": self.day, "reason": self.reason}


_MONTH_REASONS = {
    1: "Mauvais jour de janvier",
    2: "Mauvais jour de février",
    3: "Mauvais jour de mars",
    4: "Mauvais jour d'avril",
    5: "Mauvais jour de mai",
    6: "Mauvais jour de juin",
    7: "Mauvais jour de juillet",
    8: "Mauvais jour d'août",
    9: "Mauvais jour de septembre",
    10: "Mauvais jour d'octobre",
    11: "Mauvais jour de novembre",
    12: "Mauvais jour de décembre",
}

_FORBIDDEN_BY_MONTH = {
    1: (1, 2, 6, 11, 17, 18),
    2: (8, 16, 17),
    3: (2, 12, 13, 15),
    4: (1, 3, 15, 17, 18),
    5: (8, 10, 17, 30),
    6: (1, 7, 10),
    7: (1, 5, 6),
    8: (1, 3, 18, 30),
    9: (1, 2, 15, 18, 30),
    10: (15, 17),
    11: (1, 7, 11),
    12: (1, 7, 11),
}

FORBIDDEN_DAYS: Tuple[ForbiddenDayRule, ...] = tuple(
    ForbiddenDayRule(month, day, _MONTH_REASONS[month])
    for month, days in _FORBIDDEN_BY_MONTH.items()
    for day in days
)

FORBIDDEN_DAY_KEYS: FrozenSet[str] = frozenset(rule.key for rule in FORBIDDEN_DAYS)

FORBIDDEN_REASON_BY_KEY: Mapping[str, Optional[str]] = MappingProxyType(
    {rule.key: rule.reason for rule in FORBIDDEN_DAYS}
)


# ============================================================
# "Ne rien" days: lunar cycle days (1..30) where nothing important
# should be started. Confirmed on two consecutive reference cycles.
# ============================================================

NO_ACTION_LUNAR_DAYS: FrozenSet[int] = frozenset({3, 5, 6, 13, 21, 24, 25})


# ============================================================
# Moon phases
# ============================================================

class MoonPhase(str, Enum):
    NEW = "new"
    WAXING_CRESCENT = "waxing-crescent"
    FIRST_QUARTER = "first-quarter"
    WAXING_GIBBOUS = "waxing-gibbous"
    FULL = "full"
    WANING_GIBBOUS = "waning-gibbous"
    LAST_QUARTER = "last-quarter"
    WANING_CRESCENT = "waning-crescent"

    def __str__(self) -> str:
        return self.value


MOON_PHASE_DISPLAY_NAMES: Mapping[MoonPhase, str] = MappingProxyType({
    MoonPhase.NEW: "Nouvelle lune",
    MoonPhase.WAXING_CRESCENT: "Premier croissant",
    MoonPhase.FIRST_QUARTER: "Premier quartier",
    MoonPhase.WAXING_GIBBOUS: "Gibbeuse croissante",
    MoonPhase.FULL: "Pleine lune",
    MoonPhase.WANING_GIBBOUS: "Gibbeuse décroissante",
    MoonPhase.LAST_QUARTER: "Dernier quartier",
    MoonPhase.WANING_CRESCENT: "Dernier croissant",
})


# Python weekday() order (Monday = 0)
DAYS_OF_WEEK_FR: Tuple[str, ...] = (
    "Lundi",
    "Mardi",
    "Mercredi",
    "Jeudi",
    "Vendredi",
    "Samedi",
    "Dimanche",
)
