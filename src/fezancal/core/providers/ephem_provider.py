from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone

import ephem


def _ephem_date(dt_utc: datetime) -> ephem.Date:
    # ephem.Date reads a naive datetime as UTC
    if dt_utc.tzinfo is not None:
        dt_utc = dt_utc.astimezone(timezone.utc).replace(tzinfo=None)
    return ephem.Date(dt_utc)


@dataclass(frozen=True)
class EphemProvider:
    """
    Solar/lunar ecliptic longitudes through PyEphem (VSOP87 / ELP, built in).

    No ephemeris file is needed, so this is the default provider. Longitudes
    are on the ecliptic and equinox of date, like SkyfieldProvider's
    "of_date" frame.
    """

    def _lon_deg(self, body: ephem.Body, dt_utc: datetime) -> float:
        when = _ephem_date(dt_utc)
        body.compute(when)
        ecl = ephem.Ecliptic(body, epoch=when)
        return math.degrees(float(ecl.lon)) % 360.0

    def sun_ecliptic_longitude_deg(self, dt_utc: datetime) -> float:
        return self._lon_deg(ephem.Sun(), dt_utc)

    def moon_ecliptic_longitude_deg(self, dt_utc: datetime) -> float:
        return self._lon_deg(ephem.Moon(), dt_utc)
