from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from fezancal.core.julian import current_julian_day, date_to_julian_day, julian_day_to_date

UTC = timezone.utc


def test_j2000_epoch():
    assert date_to_julian_day(datetime(2000, 1, 1, 12, tzinfo=UTC)) == pytest.approx(2451545.0, abs=1e-9)


def test_plain_date_is_midnight():
    assert date_to_julian_day(date(2000, 1, 1)) == pytest.approx(2451544.5, abs=1e-9)


def test_meeus_example_sputnik():
    # Meeus example 7.a: 1957 October 4.81 = JD 2436116.31
    dt = datetime(1957, 10, 4, 19, 26, 24, tzinfo=UTC)
    assert date_to_julian_day(dt) == pytest.approx(2436116.31, abs=1e-6)


def test_naive_datetime_is_read_as_ut():
    naive = datetime(2025, 6, 1, 6, 30)
    aware = datetime(2025, 6, 1, 6, 30, tzinfo=UTC)
    assert date_to_julian_day(naive) == date_to_julian_day(aware)


def test_aware_datetime_is_converted_to_utc():
    plus_one = timezone(timedelta(hours=1))
    assert date_to_julian_day(datetime(2025, 6, 1, 13, 0, tzinfo=plus_one)) == pytest.approx(
        date_to_julian_day(datetime(2025, 6, 1, 12, 0, tzinfo=UTC)), abs=1e-9
    )


def test_julian_day_to_date_j2000():
    assert julian_day_to_date(2451545.0) == datetime(2000, 1, 1, 12, tzinfo=UTC)


def test_julian_day_to_date_meeus_example():
    assert julian_day_to_date(2436116.31) == datetime(1957, 10, 4, 19, 26, 24, tzinfo=UTC)


def test_gregorian_reform_boundary():
    # 1582-10-15 (Gregorian) follows 1582-10-04 (Julian)
    assert julian_day_to_date(2299160.5) == datetime(1582, 10, 15, tzinfo=UTC)
    assert julian_day_to_date(2299159.5) == datetime(1582, 10, 4, tzinfo=UTC)


@pytest.mark.parametrize(
    "dt",
    [
        datetime(1900, 1, 1, 0, 0, 0, tzinfo=UTC),
        datetime(1999, 12, 31, 23, 59, 59, tzinfo=UTC),
        datetime(2024, 2, 29, 12, 0, 0, tzinfo=UTC),
        datetime(2025, 12, 20, 1, 43, 7, tzinfo=UTC),
        datetime(2100, 12, 31, 18, 5, 33, tzinfo=UTC),
    ],
)
def test_round_trip_within_one_second(dt):
    back = julian_day_to_date(date_to_julian_day(dt))
    assert abs((back - dt).total_seconds()) <= 1.0


def test_result_is_utc_aware():
    assert julian_day_to_date(2460000.25).tzinfo is UTC


def test_non_finite_rejected():
    with pytest.raises(ValueError):
        julian_day_to_date(float("nan"))


def test_current_julian_day_is_now():
    before = date_to_julian_day(datetime.now(UTC))
    jd = current_julian_day()
    after = date_to_julian_day(datetime.now(UTC))
    assert before <= jd <= after
