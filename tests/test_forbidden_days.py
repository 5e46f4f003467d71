from __future__ import annotations

from datetime import date, datetime

import pytest

from fezancal.features.config import ForbiddenDayRule
from fezancal.features.forbidden_days import (
    add_custom_forbidden_days,
    get_all_forbidden_days,
    get_forbidden_day_reason,
    is_forbidden_day,
)
from fezancal.features.no_action_days import (
    get_no_action_days_count,
    get_no_action_lunar_days,
    is_no_action_day,
)


@pytest.mark.parametrize("month, day", [(1, 1), (1, 2), (2, 8), (5, 30), (9, 30), (12, 1), (12, 11)])
def test_forbidden(month, day):
    assert is_forbidden_day(date(2026, month, day))


@pytest.mark.parametrize("month, day", [(1, 15), (6, 15), (12, 25), (2, 28), (10, 1)])
def test_not_forbidden(month, day):
    assert not is_forbidden_day(date(2026, month, day))


def test_year_is_ignored():
    for year in (1900, 2000, 2025, 2100):
        assert is_forbidden_day(date(year, 1, 1))


def test_datetime_input():
    assert is_forbidden_day(datetime(2025, 3, 13, 23, 0))


def test_table_size():
    rules = get_all_forbidden_days()
    assert len(rules) == 45
    assert len({r.key for r in rules}) == 45


def test_reason():
    assert get_forbidden_day_reason(date(2026, 1, 1)) == "Mauvais jour de janvier"
    assert get_forbidden_day_reason(date(2026, 8, 3)) == "Mauvais jour d'août"
    assert get_forbidden_day_reason(date(2026, 1, 15)) is None


def test_custom_rules_extend_without_mutation():
    extra = ForbiddenDayRule(6, 15, "fête locale")
    merged = add_custom_forbidden_days([extra])
    assert len(merged) == 46
    assert merged[-1] == extra
    assert len(get_all_forbidden_days()) == 45
    assert not is_forbidden_day(date(2026, 6, 15))


def test_custom_rule_validation():
    with pytest.raises(ValueError):
        add_custom_forbidden_days([ForbiddenDayRule(13, 1)])


def test_no_action_days():
    assert get_no_action_lunar_days() == (3, 5, 6, 13, 21, 24, 25)
    assert get_no_action_days_count() == 7
    assert is_no_action_day(13)
    assert not is_no_action_day(1)
    assert not is_no_action_day(30)
