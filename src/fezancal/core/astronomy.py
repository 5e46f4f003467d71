# src/fezancal/core/astronomy.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Protocol, runtime_checkable

from .config import ProviderConfig
from .timeutil import as_utc

log = logging.getLogger(__name__)


def norm360(deg: float) -> float:
    x = deg % 360.0
    return x + 360.0 if x < 0 else x


@runtime_checkable
class AstroProvider(Protocol):
    def sun_ecliptic_longitude_deg(self, dt_utc: datetime) -> float: ...
    def moon_ecliptic_longitude_deg(self, dt_utc: datetime) -> float: ...


@dataclass(frozen=True)
class AstronomyEngine:
    provider: AstroProvider

    def sun_lon(self, dt: datetime) -> float:
        """Apparent solar ecliptic longitude (degrees)."""
        return norm360(self.provider.sun_ecliptic_longitude_deg(as_utc(dt)))

    def moon_lon(self, dt: datetime) -> float:
        """Apparent lunar ecliptic longitude (degrees)."""
        return norm360(self.provider.moon_ecliptic_longitude_deg(as_utc(dt)))

    def elongation(self, dt: datetime) -> float:
        """λ☾ - λ☉ in [0, 360). New moon = 0, full moon = 180."""
        return norm360(self.moon_lon(dt) - self.sun_lon(dt))

    def illumination_phase(self, dt: datetime) -> float:
        """
        Position in the synodic cycle as a fraction in [0, 1):
        0 = new, 0.25 = first quarter, 0.5 = full, 0.75 = last quarter.
        """
        return self.elongation(dt) / 360.0


@lru_cache(maxsize=4)
def engine_for(provider: ProviderConfig) -> AstronomyEngine:
    """
    Build (once per distinct ProviderConfig) the engine behind moon phases.
    Skyfield loads an ephemeris file, so it is imported only when selected.
    """
    if provider.name == "skyfield":
        from .providers.skyfield_provider import SkyfieldProvider

        ep_path = Path(provider.ephemeris_path).expanduser() if provider.ephemeris_path else None
        log.debug("astronomy provider: skyfield ephemeris=%s path=%s", provider.ephemeris, ep_path)
        return AstronomyEngine(provider=SkyfieldProvider(ephemeris=provider.ephemeris, ephemeris_path=ep_path))

    from .providers.ephem_provider import EphemProvider

    log.debug("astronomy provider: ephem")
    return AstronomyEngine(provider=EphemProvider())
