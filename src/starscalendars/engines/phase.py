"""
starscalendars.engines.phase
----------------------------
Moon phase from the Moon-Sun elongation.

The elongation delivered by the ephemeris is an unsigned separation in
[0,180]. Whether the Moon is waxing is inferred from the trend between two
consecutive readings; a drop of 100 degrees or more is treated as a wrap and
not as a waning step.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Tuple

from starscalendars import config
from starscalendars.core.types import MoonPhase, PhaseState

PHASE_NAMES: Tuple[str, ...] = (
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
)


def signed_elongation(elongation_deg: float, is_increasing: bool) -> float:
    """Map the unsigned separation to a full-cycle angle in [0,360)."""
    base = (360.0 - elongation_deg) if is_increasing else elongation_deg
    return (base + config.PHASE_CALIBRATION_DEG) % 360.0


def age_days(se_deg: float) -> float:
    """Days since new moon, rounded up to 1/1000 day."""
    return math.ceil(se_deg / 360.0 * config.SYNODIC_MONTH_DAYS * 1000.0) / 1000.0


def bucket(se_deg: float) -> int:
    """Index into PHASE_NAMES. Quarters and the syzygies get a narrow band."""
    if se_deg < 10.0 or se_deg > 350.0:
        return 0
    if se_deg <= 85.0:
        return 1
    if se_deg < 95.0:
        return 2
    if se_deg <= 170.0:
        return 3
    if se_deg < 190.0:
        return 4
    if se_deg <= 265.0:
        return 5
    if se_deg < 275.0:
        return 6
    return 7


def classify(state: PhaseState, elongation_deg: float, instant: Optional[datetime] = None) -> MoonPhase:
    """
    Classify one reading and update the trend memory in state.

    The instant is accepted for call-site symmetry with the other engines and
    does not affect the result.
    """
    prev = state.previous_elongation
    if elongation_deg == prev:
        increasing = state.previous_increasing
    else:
        increasing = elongation_deg < prev and (prev - elongation_deg) < config.PHASE_WRAP_THRESHOLD_DEG

    state.previous_elongation = elongation_deg
    state.previous_increasing = increasing

    se = signed_elongation(elongation_deg, increasing)
    return MoonPhase(
        bucket=bucket(se),
        age_days=age_days(se),
        is_increasing=increasing,
        elongation_deg=elongation_deg,
    )
