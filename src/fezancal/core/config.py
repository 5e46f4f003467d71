# src/fezancal/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from typing import Literal, Optional

ProviderName = Literal["ephem", "skyfield"]

FEZAN_TZ_ENV = "FEZAN_TZ"
FEZAN_PROVIDER_ENV = "FEZAN_PROVIDER"
FEZAN_EPHEMERIS_ENV = "FEZAN_EPHEMERIS"
FEZAN_EPHEMERIS_PATH_ENV = "FEZAN_EPHEMERIS_PATH"
FEZAN_CACHE_SIZE_ENV = "FEZAN_CACHE_SIZE"
FEZAN_CACHE_TTL_ENV = "FEZAN_CACHE_TTL_SECONDS"

DEFAULT_TZ = "Africa/Porto-Novo"

MIN_SUPPORTED_YEAR = 1900
MAX_SUPPORTED_YEAR = 2100


@dataclass(frozen=True)
class AnchorConfig:
    """
    The single calibration point of the 30-day cycle.

    Observed on the handwritten reference calendar: lunar day 1 (Mêdjo)
    starts on 2025-12-20 at 02:43.
    """
    reference_date: date = date(2025, 12, 20)
    reference_lunar_day: int = 1

    def __post_init__(self) -> None:
        if not (1 <= int(self.reference_lunar_day) <= 30):
            raise ValueError(f"reference_lunar_day must be in 1..30, got {self.reference_lunar_day}")


@dataclass(frozen=True)
class PhaseThresholds:
    """
    Illumination phase cut points (0=new, 0.5=full).

    The bucketing bounds and the new/full flag bounds are tuned separately
    and must stay separate.
    """
    new_below: float = 0.025
    new_from: float = 0.975
    waxing_crescent_below: float = 0.225
    first_quarter_below: float = 0.275
    waxing_gibbous_below: float = 0.475
    full_below: float = 0.525
    waning_gibbous_below: float = 0.725
    last_quarter_below: float = 0.775

    flag_new_below: float = 0.02
    flag_new_above: float = 0.98
    flag_full_above: float = 0.48
    flag_full_below: float = 0.52


@dataclass(frozen=True)
class CacheConfig:
    max_size: int = 365
    ttl_seconds: float = 24 * 60 * 60


@dataclass(frozen=True)
class ProviderConfig:
    """
    Which solar/lunar position source feeds the illumination phase.

    - ephem: PyEphem built-in theories, no data files (default)
    - skyfield: JPL ephemeris (de440s.bsp / de421.bsp) through skyfield
    """
    name: ProviderName = "ephem"
    ephemeris: Optional[str] = None
    ephemeris_path: Optional[str] = None


@dataclass(frozen=True)
class FezanConfig:
    timezone: str = DEFAULT_TZ
    anchor: AnchorConfig = field(default_factory=AnchorConfig)
    phase: PhaseThresholds = field(default_factory=PhaseThresholds)
    cache: CacheConfig = field(default_factory=CacheConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)


def _env_str(name: str) -> Optional[str]:
    v = os.environ.get(name, "").strip()
    return v or None


def _env_int(name: str, default: int) -> int:
    v = _env_str(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env_str(name)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {v!r}") from e


def config_from_env() -> FezanConfig:
    provider = (_env_str(FEZAN_PROVIDER_ENV) or "ephem").lower()
    if provider not in ("ephem", "skyfield"):
        raise ValueError(f"{FEZAN_PROVIDER_ENV} must be 'ephem' or 'skyfield', got {provider!r}")

    return FezanConfig(
        timezone=_env_str(FEZAN_TZ_ENV) or DEFAULT_TZ,
        cache=CacheConfig(
            max_size=_env_int(FEZAN_CACHE_SIZE_ENV, CacheConfig.max_size),
            ttl_seconds=_env_float(FEZAN_CACHE_TTL_ENV, CacheConfig.ttl_seconds),
        ),
        provider=ProviderConfig(
            name=provider,  # type: ignore[arg-type]
            ephemeris=_env_str(FEZAN_EPHEMERIS_ENV),
            ephemeris_path=_env_str(FEZAN_EPHEMERIS_PATH_ENV),
        ),
    )


@lru_cache(maxsize=1)
def load_config() -> FezanConfig:
    """
    Process-wide configuration, read once from the environment.
    Call load_config.cache_clear() after changing FEZAN_* variables.
    """
    return config_from_env()
