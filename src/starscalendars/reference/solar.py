# reference/solar.py

from __future__ import annotations

import math
from dataclasses import dataclass

from . import astro_args as aa


@dataclass(frozen=True)
class SolarCoordinates:
    """True and apparent solar longitude (degrees) and radius vector (AU)."""
    L_true_deg: float
    L_app_deg: float
    R_au: float


def solar_longitude(jd_tt: float) -> SolarCoordinates:
    """
    Computes true and apparent solar longitude for a given JD(TT)
    using truncated series expansions (accurate to ~0.01 deg).
    """
    T = aa.T_centuries(jd_tt)
    sm = aa.solar_mean_elements(T)
    fa = aa.fundamental_args(T)

    M_rad = math.radians(sm.M_deg)

    # Equation of center
    C_sun = (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * math.sin(M_rad)
        + (0.019993 - 0.000101 * T) * math.sin(2.0 * M_rad)
        + 0.000289 * math.sin(3.0 * M_rad)
    )

    L_true = aa.wrap_deg(sm.L0_deg + C_sun)

    # Radius vector from the true anomaly
    nu_rad = M_rad + math.radians(C_sun)
    R = 1.000001018 * (1.0 - sm.e * sm.e) / (1.0 + sm.e * math.cos(nu_rad))

    # Apparent longitude with aberration and leading nutation
    Omega_rad = math.radians(fa.Omega_deg)
    L_app = aa.wrap_deg(L_true - 0.00569 - 0.00478 * math.sin(Omega_rad))

    return SolarCoordinates(L_true_deg=L_true, L_app_deg=L_app, R_au=R)


def apparent_obliquity_deg(jd_tt: float) -> float:
    """Mean obliquity corrected by the leading nutation term (Meeus 25.8)."""
    T = aa.T_centuries(jd_tt)
    Omega_rad = math.radians(aa.fundamental_args(T).Omega_deg)
    return aa.mean_obliquity_deg(T) + 0.00256 * math.cos(Omega_rad)


def solar_declination_deg(L_app_deg: float, eps_deg: float) -> float:
    """Solar declination from apparent longitude and obliquity."""
    sin_delta = math.sin(math.radians(eps_deg)) * math.sin(math.radians(L_app_deg))
    return math.degrees(math.asin(sin_delta))


def solar_right_ascension_deg(L_app_deg: float, eps_deg: float) -> float:
    """Solar right ascension in degrees [0,360)."""
    L_app_rad = math.radians(L_app_deg)
    # atan2 keeps the quadrant
    y = math.cos(math.radians(eps_deg)) * math.sin(L_app_rad)
    x = math.cos(L_app_rad)
    return aa.wrap_deg(math.degrees(math.atan2(y, x)))


@dataclass(frozen=True)
class SolarEquatorial:
    ra_hours: float
    dec_deg: float
    R_au: float


def solar_equatorial(jd_tt: float) -> SolarEquatorial:
    """Apparent geocentric RA (hours), declination (degrees) and distance (AU)."""
    coords = solar_longitude(jd_tt)
    eps_deg = apparent_obliquity_deg(jd_tt)
    ra_deg = solar_right_ascension_deg(coords.L_app_deg, eps_deg)
    dec_deg = solar_declination_deg(coords.L_app_deg, eps_deg)
    return SolarEquatorial(ra_hours=ra_deg / 15.0, dec_deg=dec_deg, R_au=coords.R_au)
