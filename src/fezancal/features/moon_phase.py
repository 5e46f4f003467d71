# src/fezancal/features/moon_phase.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fezancal.core.astronomy import engine_for
from fezancal.core.config import PhaseThresholds, load_config
from fezancal.features.config import MOON_PHASE_DISPLAY_NAMES, MoonPhase


def illumination_phase(dt: datetime) -> float:
    """
    Synodic phase fraction at dt: 0 = new, 0.5 = full, back to 1 = new.
    Naive datetimes are read as UT.
    """
    return engine_for(load_config().provider).illumination_phase(dt)


def moon_phase_from_fraction(phase: float, thresholds: Optional[PhaseThresholds] = None) -> MoonPhase:
    """
    8-way bucketing. The bounds are deliberately not symmetric around
    0.25 / 0.5 / 0.75.
    """
    th = thresholds or load_config().phase
    if phase < th.new_below or phase >= th.new_from:
        return MoonPhase.NEW
    if phase < th.waxing_crescent_below:
        return MoonPhase.WAXING_CRESCENT
    if phase < th.first_quarter_below:
        return MoonPhase.FIRST_QUARTER
    if phase < th.waxing_gibbous_below:
        return MoonPhase.WAXING_GIBBOUS
    if phase < th.full_below:
        return MoonPhase.FULL
    if phase < th.waning_gibbous_below:
        return MoonPhase.WANING_GIBBOUS
    if phase < th.last_quarter_below:
        return MoonPhase.LAST_QUARTER
    return MoonPhase.WANING_CRESCENT


def is_new_moon_fraction(phase: float, thresholds: Optional[PhaseThresholds] = None) -> bool:
    th = thresholds or load_config().phase
    return phase < th.flag_new_below or phase > th.flag_new_above


def is_full_moon_fraction(phase: float, thresholds: Optional[PhaseThresholds] = None) -> bool:
    th = thresholds or load_config().phase
    return th.flag_full_above < phase < th.flag_full_below


def get_moon_phase(dt: datetime) -> MoonPhase:
    return moon_phase_from_fraction(illumination_phase(dt))


def is_new_moon(dt: datetime) -> bool:
    return is_new_moon_fraction(illumination_phase(dt))


def is_full_moon(dt: datetime) -> bool:
    return is_full_moon_fraction(illumination_phase(dt))


def get_moon_phase_display_name(phase: MoonPhase) -> str:
    return MOON_PHASE_DISPLAY_NAMES[MoonPhase(phase)]
