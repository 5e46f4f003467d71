from __future__ import annotations

import pytest

from fezancal.features.config import REST_DAY_SLOT
from fezancal.features.config import CardinalDirection as D
from fezancal.features.directions import (
    get_all_directions,
    get_direction,
    get_direction_abbreviation,
    get_direction_css_key,
)


@pytest.mark.parametrize(
    "lunar_day, expected",
    [
        (1, D.SOUTH),
        (2, D.NORTH_WEST),
        (6, D.EAST),
        (7, None),
        (8, D.WEST),
        (13, D.NORTH),
        (18, D.SOUTH_WEST),
        (30, D.NORTH_EAST),
    ],
)
def test_direction_table(lunar_day, expected):
    assert get_direction(lunar_day) is expected


def test_rest_day_is_the_only_gap():
    missing = [n for n in range(1, 31) if get_direction(n) is None]
    assert missing == [REST_DAY_SLOT]


def test_direction_wraps_with_the_cycle():
    assert get_direction(31) is get_direction(1)


def test_all_directions():
    dirs = get_all_directions()
    assert len(dirs) == 8
    assert {d.value for d in dirs} == {
        "Nord", "Nord-Est", "Est", "Sud-Est", "Sud", "Sud-Ouest", "Ouest", "Nord-Ouest",
    }


def test_css_keys_and_abbreviations():
    assert get_direction_css_key(D.NORTH_EAST) == "north-east"
    assert get_direction_abbreviation(D.SOUTH_WEST) == "SO"
    assert get_direction_abbreviation(D.WEST) == "O"


def test_rest_day_presentation():
    assert get_direction_css_key(None) == "neutral"
    assert get_direction_abbreviation(None) == "-"


def test_every_direction_has_presentation():
    for d in get_all_directions():
        assert get_direction_css_key(d)
        assert get_direction_abbreviation(d)


@pytest.mark.parametrize("n", range(1, 31))
def test_thirty_day_periodicity(n):
    assert get_direction(n) is get_direction(n + 30)
