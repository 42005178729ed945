from __future__ import annotations


# ============================================================
# Decimal-year helper (for ΔT)
# ============================================================

def decimal_year_from_jd(jd: float) -> float:
    """Julian-year approximation, good enough for ΔT at any JD."""
    return 2000.0 + (jd - 2451545.0) / 365.25


# ============================================================
# ΔT = TT - UT1 (seconds), Espenak–Meeus polynomials
# ============================================================

def delta_t_seconds(year: float) -> float:
    """
    ΔT in seconds from the NASA (Espenak–Meeus) piecewise polynomials.

    Only the branches from 1900 onwards are carried; earlier years use the
    long-term parabola. Accuracy is a few seconds over the calendar horizon,
    which is far below what the scene can show.
    """
    if year < 1900.0:
        u = (year - 1820.0) / 100.0
        return -20.0 + 32.0 * u * u
    if year < 1920.0:
        t = year - 1900.0
        return -2.79 + 1.494119 * t - 0.0598939 * t**2 + 0.0061966 * t**3 - 0.000197 * t**4
    if year < 1941.0:
        t = year - 1920.0
        return 21.20 + 0.84493 * t - 0.076100 * t**2 + 0.0020936 * t**3
    if year < 1961.0:
        t = year - 1950.0
        return 29.07 + 0.407 * t - t**2 / 233.0 + t**3 / 2547.0
    if year < 1986.0:
        t = year - 1975.0
        return 45.45 + 1.067 * t - t**2 / 260.0 - t**3 / 718.0
    if year < 2005.0:
        t = year - 2000.0
        return (
            63.86 + 0.3345 * t - 0.060374 * t**2 + 0.0017275 * t**3
            + 0.000651814 * t**4 + 0.00002373599 * t**5
        )
    if year < 2050.0:
        t = year - 2000.0
        return 62.92 + 0.32217 * t + 0.005589 * t**2
    if year < 2150.0:
        u = (year - 1820.0) / 100.0
        return -20.0 + 32.0 * u * u - 0.5628 * (2150.0 - year)
    u = (year - 1820.0) / 100.0
    return -20.0 + 32.0 * u * u


# ============================================================
# TT <-> UTC conversions (via ΔT and optionally UT1-UTC)
# ============================================================

def jd_utc_to_jd_tt(jd_utc: float, *, ut1_utc_seconds: float = 0.0) -> float:
    """
    Convert JD(UTC) to JD(TT), using:
      TT = UT1 + ΔT
      UT1 = UTC + (UT1-UTC)
    """
    y = decimal_year_from_jd(jd_utc)
    return jd_utc + (ut1_utc_seconds + delta_t_seconds(y)) / 86400.0


def jd_tt_to_jd_utc(jd_tt: float, *, ut1_utc_seconds: float = 0.0) -> float:
    """
    Approximate inverse of jd_utc_to_jd_tt.

    Two fixed-point iterations are enough for sub-second consistency
    given ΔT varies slowly.
    """
    jd_utc = jd_tt
    for _ in range(2):
        y = decimal_year_from_jd(jd_utc)
        jd_utc = jd_tt - (ut1_utc_seconds + delta_t_seconds(y)) / 86400.0
    return jd_utc

