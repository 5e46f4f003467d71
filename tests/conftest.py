from __future__ import annotations

import pytest

from fezancal.core.config import load_config
from fezancal.features.lunar_day_info import lunar_day_cache

FEZAN_ENV_VARS = (
    "FEZAN_TZ",
    "FEZAN_PROVIDER",
    "FEZAN_EPHEMERIS",
    "FEZAN_EPHEMERIS_PATH",
    "FEZAN_CACHE_SIZE",
    "FEZAN_CACHE_TTL_SECONDS",
)


@pytest.fixture(autouse=True)
def _clean_state(monkeypatch):
    for name in FEZAN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    load_config.cache_clear()
    lunar_day_cache.clear()
    yield
    lunar_day_cache.clear()
    load_config.cache_clear()
