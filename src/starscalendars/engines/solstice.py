"""
starscalendars.engines.solstice
-------------------------------
Next December (winter) solstice: the instant the Sun's apparent geocentric
longitude reaches 270 degrees.
"""

from __future__ import annotations

import math

from starscalendars.reference import solar
from starscalendars.reference import time_scales as ts

TROPICAL_YEAR_DAYS = 365.2422
WINTER_SOLSTICE_LON_DEG = 270.0


def _refine(jde: float, target_deg: float, *, tol_days: float = 1e-7, max_iter: int = 30) -> float:
    """Meeus ch. 27 correction: JDE += 58 sin(target - lambda)."""
    for _ in range(max_iter):
        lam = solar.solar_longitude(jde).L_app_deg
        corr = 58.0 * math.sin(math.radians(target_deg - lam))
        jde += corr
        if abs(corr) < tol_days:
            break
    return jde


def next_winter_solstice(jd_utc_start: float) -> float:
    """JD(UTC) of the first winter solstice strictly after jd_utc_start."""
    if not math.isfinite(jd_utc_start):
        raise ValueError(f"Invalid Julian Day: {jd_utc_start}")

    start_tt = ts.jd_utc_to_jd_tt(jd_utc_start)
    lam0 = solar.solar_longitude(start_tt).L_app_deg
    ahead = (WINTER_SOLSTICE_LON_DEG - lam0) % 360.0
    guess = start_tt + ahead / 360.0 * TROPICAL_YEAR_DAYS

    jde = _refine(guess, WINTER_SOLSTICE_LON_DEG)
    if jde <= start_tt:
        jde = _refine(jde + TROPICAL_YEAR_DAYS, WINTER_SOLSTICE_LON_DEG)
    return ts.jd_tt_to_jd_utc(jde)
