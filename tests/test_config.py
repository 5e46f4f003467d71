from __future__ import annotations

from datetime import date

import pytest

from fezancal.core.config import (
    DEFAULT_TZ,
    AnchorConfig,
    FezanConfig,
    config_from_env,
    load_config,
)


def test_defaults():
    cfg = config_from_env()
    assert cfg == FezanConfig()
    assert cfg.timezone == DEFAULT_TZ == "Africa/Porto-Novo"
    assert cfg.anchor == AnchorConfig(reference_date=date(2025, 12, 20), reference_lunar_day=1)
    assert cfg.cache.max_size == 365
    assert cfg.cache.ttl_seconds == 24 * 60 * 60
    assert cfg.provider.name == "ephem"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("FEZAN_TZ", "UTC")
    monkeypatch.setenv("FEZAN_CACHE_SIZE", "30")
    monkeypatch.setenv("FEZAN_CACHE_TTL_SECONDS", "2.5")
    monkeypatch.setenv("FEZAN_PROVIDER", "Skyfield")
    monkeypatch.setenv("FEZAN_EPHEMERIS", "de421.bsp")
    cfg = config_from_env()
    assert cfg.timezone == "UTC"
    assert cfg.cache.max_size == 30
    assert cfg.cache.ttl_seconds == 2.5
    assert cfg.provider.name == "skyfield"
    assert cfg.provider.ephemeris == "de421.bsp"
    assert cfg.provider.ephemeris_path is None


def test_blank_env_uses_default(monkeypatch):
    monkeypatch.setenv("FEZAN_TZ", "   ")
    assert config_from_env().timezone == DEFAULT_TZ


@pytest.mark.parametrize(
    "name, value",
    [
        ("FEZAN_PROVIDER", "horizons"),
        ("FEZAN_CACHE_SIZE", "many"),
        ("FEZAN_CACHE_TTL_SECONDS", "forever"),
    ],
)
def test_invalid_env(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        config_from_env()


def test_load_config_is_cached(monkeypatch):
    first = load_config()
    monkeypatch.setenv("FEZAN_TZ", "UTC")
    assert load_config() is first
    load_config.cache_clear()
    assert load_config().timezone == "UTC"


def test_configs_are_hashable():
    # ProviderConfig keys the astronomy engine cache
    assert hash(config_from_env().provider) == hash(FezanConfig().provider)
