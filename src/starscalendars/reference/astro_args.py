from __future__ import annotations

import math
from dataclasses import dataclass
from math import fmod


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    return y


def arcsec_to_deg(arcsec: float) -> float:
    return arcsec / 3600.0


# ------------------------------------------------------------
# Time variable (TT)
# ------------------------------------------------------------

J2000_TT = 2451545.0  # JD(TT) at J2000.0


def T_centuries(jd_tt: float) -> float:
    """Julian centuries from J2000.0 in TT."""
    return (jd_tt - J2000_TT) / 36525.0


# ------------------------------------------------------------
# Fundamental arguments (Meeus / ELP2000-style; degrees)
# ------------------------------------------------------------

@dataclass(frozen=True)
class FundamentalArgs:
    """Lunar fundamental arguments, degrees wrapped to [0,360)."""
    Lp_deg: float     # Moon's mean longitude
    D_deg: float      # mean elongation
    M_deg: float      # Sun's mean anomaly
    Mp_deg: float     # Moon's mean anomaly
    F_deg: float      # argument of latitude
    Omega_deg: float  # longitude of the ascending node


def fundamental_args(T: float) -> FundamentalArgs:
    """
    Fundamental arguments (mean elements).

      L' = 218.3164477 + 481267.88123421 T - 0.0015786 T^2 + T^3/538841 - T^4/65194000
      D  = 297.8501921 + 445267.1114034  T - 0.0018819 T^2 + T^3/545868  - T^4/113065000
      M  = 357.5291092 + 35999.0502909  T - 0.0001536 T^2 + T^3/24490000
      M' = 134.9633964 + 477198.8675055 T + 0.0087414 T^2 + T^3/69699   - T^4/14712000
      F  = 93.2720950  + 483202.0175233 T - 0.0036539 T^2 - T^3/3526000 + T^4/863310000
      Ω  = 125.04452   - 1934.136261 T    + 0.0020708 T^2 + T^3/450000
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2

    Lp = 218.3164477 + 481267.88123421 * T - 0.0015786 * T2 + T3 / 538841.0 - T4 / 65194000.0
    D = 297.8501921 + 445267.1114034 * T - 0.0018819 * T2 + T3 / 545868.0 - T4 / 113065000.0
    M = 357.5291092 + 35999.0502909 * T - 0.0001536 * T2 + T3 / 24490000.0
    Mp = 134.9633964 + 477198.8675055 * T + 0.0087414 * T2 + T3 / 69699.0 - T4 / 14712000.0
    F = 93.2720950 + 483202.0175233 * T - 0.0036539 * T2 - T3 / 3526000.0 + T4 / 863310000.0
    Omega = 125.04452 - 1934.136261 * T + 0.0020708 * T2 + T3 / 450000.0

    return FundamentalArgs(
        Lp_deg=wrap_deg(Lp),
        D_deg=wrap_deg(D),
        M_deg=wrap_deg(M),
        Mp_deg=wrap_deg(Mp),
        F_deg=wrap_deg(F),
        Omega_deg=wrap_deg(Omega),
    )


def eccentricity_factor(T: float) -> float:
    """
    Eccentricity factor E for the Earth's orbit, scaling lunar terms that
    depend on the Sun's mean anomaly.
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)


# ------------------------------------------------------------
# Mean obliquity epsilon
# ------------------------------------------------------------

def mean_obliquity_deg(T: float) -> float:
    """
    Mean obliquity of the ecliptic (degrees), IAU 2000:
        eps = 84381.406" - 46.836769"T - 0.0001831"T^2 + 0.00200340"T^3
              - 0.000000576"T^4 - 0.0000000434"T^5
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2
    T5 = T4 * T
    eps_arcsec = (
        84381.406
        - 46.836769 * T
        - 0.0001831 * T2
        + 0.00200340 * T3
        - 0.000000576 * T4
        - 0.0000000434 * T5
    )
    return arcsec_to_deg(eps_arcsec)


# ------------------------------------------------------------
# Nutation (leading terms, Meeus ch. 22 low-accuracy form)
# ------------------------------------------------------------

@dataclass(frozen=True)
class Nutation:
    dpsi_deg: float  # nutation in longitude
    deps_deg: float  # nutation in obliquity


def nutation(T: float) -> Nutation:
    """Nutation to ~0.5" in longitude and ~0.1" in obliquity."""
    omega = math.radians(125.04452 - 1934.136261 * T)
    L = math.radians(280.4665 + 36000.7698 * T)
    Lp = math.radians(218.3165 + 481267.8813 * T)

    dpsi = (
        -17.20 * math.sin(omega)
        - 1.32 * math.sin(2.0 * L)
        - 0.23 * math.sin(2.0 * Lp)
        + 0.21 * math.sin(2.0 * omega)
    )
    deps = (
        9.20 * math.cos(omega)
        + 0.57 * math.cos(2.0 * L)
        + 0.10 * math.cos(2.0 * Lp)
        - 0.09 * math.cos(2.0 * omega)
    )
    return Nutation(dpsi_deg=arcsec_to_deg(dpsi), deps_deg=arcsec_to_deg(deps))


# ------------------------------------------------------------
# Sun mean elements (Meeus-style)
# ------------------------------------------------------------

@dataclass(frozen=True)
class SolarMean:
    L0_deg: float  # mean longitude of Sun
    M_deg: float   # mean anomaly of Sun
    e: float       # eccentricity of Earth's orbit


def solar_mean_elements(T: float) -> SolarMean:
    """
    Meeus-style geometric mean longitude L0, mean anomaly M and orbital
    eccentricity e.
    """
    T2 = T * T
    L0 = 280.46646 + 36000.76983 * T + 0.0003032 * T2
    M = 357.52911 + 35999.05029 * T - 0.0001537 * T2
    e = 0.016708634 - 0.000042037 * T - 0.0000001267 * T2
    return SolarMean(L0_deg=wrap_deg(L0), M_deg=wrap_deg(M), e=e)
