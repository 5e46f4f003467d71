from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from fezancal.core.astronomy import AstronomyEngine, engine_for
from fezancal.core.config import ProviderConfig
from fezancal.core.providers.ephem_provider import EphemProvider

UTC = timezone.utc


def _wrap180(deg: float) -> float:
    return (deg + 180.0) % 360.0 - 180.0


@pytest.fixture(scope="module")
def engine():
    return AstronomyEngine(provider=EphemProvider())


def test_default_engine_uses_ephem():
    assert isinstance(engine_for(ProviderConfig()).provider, EphemProvider)


@pytest.mark.parametrize(
    "dt, lon",
    [
        (datetime(2025, 3, 20, 9, 1, tzinfo=UTC), 0.0),     # March equinox
        (datetime(2025, 6, 21, 2, 42, tzinfo=UTC), 90.0),   # June solstice
        (datetime(2025, 9, 22, 18, 19, tzinfo=UTC), 180.0), # September equinox
    ],
)
def test_sun_longitude_at_equinoxes_and_solstice(engine, dt, lon):
    assert abs(_wrap180(engine.sun_lon(dt) - lon)) < 0.05


def test_elongation_at_new_moon(engine):
    # new moon 2025-01-29 12:36 UTC
    assert abs(_wrap180(engine.elongation(datetime(2025, 1, 29, 12, 36, tzinfo=UTC)))) < 0.1


def test_elongation_at_full_moon(engine):
    # full moon 2025-02-12 13:53 UTC
    assert engine.elongation(datetime(2025, 2, 12, 13, 53, tzinfo=UTC)) == pytest.approx(180.0, abs=0.1)


def test_naive_datetime_is_utc(engine):
    naive = datetime(2025, 3, 1, 6)
    assert engine.illumination_phase(naive) == pytest.approx(
        engine.illumination_phase(naive.replace(tzinfo=UTC))
    )


def test_phase_grows_through_the_month(engine):
    start = datetime(2025, 1, 30, 12, tzinfo=UTC)
    phases = [engine.illumination_phase(start + timedelta(days=i)) for i in range(8)]
    assert phases == sorted(phases)
