from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal, Optional, Tuple, Union
import logging

from skyfield.api import Loader

log = logging.getLogger(__name__)


# ----------------------------
# Frame selection
# ----------------------------
EclipticFrameName = Literal[
    "of_date",   # ecliptic and equinox of date
    "J2000",     # ecliptic J2000
    "builtin",   # obs.ecliptic_latlon()
]


def _resolve_ecliptic_frame(name: EclipticFrameName):
    """
    Return a Skyfield frame object, or None for obs.ecliptic_latlon().
    The phase only needs the Moon-Sun longitude difference, so any
    consistent frame works; "of_date" is the default.
    """
    if name == "builtin":
        return None

    from skyfield.framelib import ecliptic_frame, ecliptic_J2000_frame

    if name == "J2000":
        return ecliptic_J2000_frame
    return ecliptic_frame


# ----------------------------
# Ephemeris path resolution
# ----------------------------
def _project_data_dir() -> Path:
    return Path(__file__).resolve().parents[4] / "data"


def _default_ephemeris_path() -> Path:
    """
    Prefer de440s (longer coverage) if present; otherwise fall back to de421.
    """
    data_dir = _project_data_dir()
    p440s = data_dir / "de440s.bsp"
    p421 = data_dir / "de421.bsp"
    return p440s if p440s.exists() else p421


def _resolve_ephemeris_path(
    *,
    ephemeris_path: Optional[Path],
    ephemeris: Optional[Union[str, Path]],
) -> Path:
    """
    Resolution priority:
      1) ephemeris_path (Path) if provided
      2) ephemeris (str|Path) if provided:
         - absolute path -> use as is
         - relative path / filename -> resolve under project data dir
      3) default: prefer de440s if present else de421
    """
    if ephemeris_path is not None:
        return ephemeris_path

    if ephemeris is not None:
        p = ephemeris if isinstance(ephemeris, Path) else Path(ephemeris)
        if p.is_absolute():
            return p
        return _project_data_dir() / p

    return _default_ephemeris_path()


@dataclass(frozen=True)
class SkyfieldProvider:
    """
    JPL-ephemeris solar/lunar longitudes through Skyfield.

    de440s covers 1849..2150, which contains the whole supported year range;
    de421 stops at 2053.
    """

    ephemeris_path: Optional[Path] = None
    ephemeris: Optional[Union[str, Path]] = None
    ecliptic_frame: EclipticFrameName = "of_date"

    def __post_init__(self) -> None:
        resolved = _resolve_ephemeris_path(
            ephemeris_path=self.ephemeris_path,
            ephemeris=self.ephemeris,
        )
        object.__setattr__(self, "ephemeris_path", resolved)

        if not self.ephemeris_path.exists():
            data_dir = _project_data_dir()
            candidates = [
                data_dir / "de440s.bsp",
                data_dir / "de421.bsp",
            ]
            cand_str = "\n".join(f"  - {p}" for p in candidates)
            raise FileNotFoundError(
                f"Ephemeris not found: {self.ephemeris_path}\n"
                f"Place one of the following files under {data_dir}:\n"
                f"{cand_str}\n"
                "Or set FEZAN_EPHEMERIS='de440s.bsp' / FEZAN_EPHEMERIS_PATH=/path/to/file.bsp."
            )

        loader = Loader(str(self.ephemeris_path.parent))
        eph = loader(self.ephemeris_path.name)
        ts = loader.timescale()

        object.__setattr__(self, "_eph", eph)
        object.__setattr__(self, "_ts", ts)
        object.__setattr__(self, "_earth", eph["earth"])
        object.__setattr__(self, "_sun", eph["sun"])
        object.__setattr__(self, "_moon", eph["moon"])
        object.__setattr__(self, "_ecliptic_frame_obj", _resolve_ecliptic_frame(self.ecliptic_frame))

        start_utc, end_utc = self._compute_ephemeris_utc_range()
        object.__setattr__(self, "_ephem_start_utc", start_utc)
        object.__setattr__(self, "_ephem_end_utc", end_utc)
        log.debug("ephemeris %s covers %s .. %s", self.ephemeris_path, start_utc, end_utc)

    def _compute_ephemeris_utc_range(self) -> Tuple[datetime, datetime]:
        """
        Compute coverage from SPK segments.
        Skyfield throws EphemerisRangeError deep inside; we surface a clearer error earlier.
        """
        segments = getattr(self._eph, "spk", None)
        if segments is None or not getattr(segments, "segments", None):
            return (
                datetime.min.replace(tzinfo=timezone.utc),
                datetime.max.replace(tzinfo=timezone.utc),
            )

        segs = segments.segments
        start_jd = max(s.start_jd for s in segs)
        end_jd = min(s.end_jd for s in segs)

        start_utc = self._ts.tt_jd(start_jd).utc_datetime().replace(tzinfo=timezone.utc)
        end_utc = self._ts.tt_jd(end_jd).utc_datetime().replace(tzinfo=timezone.utc)
        return start_utc, end_utc

    def _as_utc(self, dt_utc: datetime) -> datetime:
        if dt_utc.tzinfo is None:
            raise ValueError("dt_utc must be timezone-aware")
        return dt_utc.astimezone(timezone.utc)

    def _check_ephemeris_range(self, dt_utc: datetime) -> None:
        dt = self._as_utc(dt_utc)
        start = self._ephem_start_utc
        end = self._ephem_end_utc

        if dt < start or dt > end:
            raise ValueError(
                "Requested datetime is outside ephemeris coverage.\n"
                f"  requested: {dt.isoformat()}\n"
                f"  ephemeris: {self.ephemeris_path}\n"
                f"  coverage : {start.isoformat()} .. {end.isoformat()}\n"
                "Hint: use de440s.bsp (place it under ./data or set FEZAN_EPHEMERIS='de440s.bsp')."
            )

    def _lon_deg(self, body_name: str, dt_utc: datetime) -> float:
        self._check_ephemeris_range(dt_utc)
        t = self._ts.from_datetime(self._as_utc(dt_utc))
        body = self._sun if body_name == "sun" else self._moon

        obs = self._earth.at(t).observe(body).apparent()

        frame_obj = self._ecliptic_frame_obj
        if frame_obj is None:
            _lat, lon, _dist = obs.ecliptic_latlon()
        else:
            _lat, lon, _dist = obs.frame_latlon(frame_obj)

        return float(lon.degrees % 360.0)

    def sun_ecliptic_longitude_deg(self, dt_utc: datetime) -> float:
        return self._lon_deg("sun", dt_utc)

    def moon_ecliptic_longitude_deg(self, dt_utc: datetime) -> float:
        return self._lon_deg("moon", dt_utc)
