"""
starscalendars.ephemeris.analytic
---------------------------------
Offline provider: truncated Meeus series for the Sun and Moon and the JPL
approximate Keplerian elements (Standish, Table 1, 1800-2050 AD) for the
planets. Accuracy is at the arcminute level, which is what the scene needs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from starscalendars import config
from starscalendars.core.types import Body, EarthElements, MoonElements, SunElements
from starscalendars.reference import lunar, solar
from starscalendars.reference import time_scales as ts

# [a (AU), e, I (deg), L (deg), lon_peri (deg), lon_node (deg)]
_PLANETS = (
    Body.MERCURY, Body.VENUS, Body.EARTH, Body.MARS, Body.JUPITER,
    Body.SATURN, Body.URANUS, Body.NEPTUNE, Body.PLUTO,
)

_ELEMENTS_J2000 = np.array([
    [0.38709927, 0.20563593, 7.00497902, 252.25032350, 77.45779628, 48.33076593],
    [0.72333566, 0.00677672, 3.39467605, 181.97909950, 131.60246718, 76.67984255],
    [1.00000261, 0.01671123, -0.00001531, 100.46457166, 102.93768193, 0.0],
    [1.52371034, 0.09339410, 1.84969142, -4.55343205, -23.94362959, 49.55953891],
    [5.20288700, 0.04838624, 1.30439695, 34.39644051, 14.72847983, 100.47390909],
    [9.53667594, 0.05386179, 2.48599187, 49.95424423, 92.59887831, 113.66242448],
    [19.18916464, 0.04725744, 0.77263783, 313.23810451, 170.95427630, 74.01692503],
    [30.06992276, 0.00859048, 1.77004347, -55.12002969, 44.96476227, 131.78422574],
    [39.48211675, 0.24882730, 17.14001206, 238.92903833, 224.06891629, 110.30393684],
])

# per Julian century
_ELEMENT_RATES = np.array([
    [0.00000037, 0.00001906, -0.00594749, 149472.67411175, 0.16047689, -0.12534081],
    [0.00000390, -0.00004107, -0.00078890, 58517.81538729, 0.00268329, -0.27769418],
    [0.00000562, -0.00004392, -0.01294668, 35999.37244981, 0.32327364, 0.0],
    [0.00001847, 0.00007882, -0.00813131, 19140.30268499, 0.44441088, -0.29257343],
    [-0.00011607, -0.00013253, -0.00183714, 3034.74612775, 0.21252668, 0.20469106],
    [-0.00125060, -0.00050991, 0.00193609, 1222.49362201, -0.41897216, -0.28867794],
    [-0.00196176, -0.00004397, -0.00242939, 428.48202785, 0.40805281, 0.04240589],
    [0.00026291, 0.00005105, 0.00035372, 218.45945325, -0.32241464, -0.00508664],
    [-0.00031596, 0.00005170, 0.00004818, 145.20780515, -0.04062942, -0.01183482],
])


def solve_kepler(M: np.ndarray, e: np.ndarray, *, iterations: int = 8) -> np.ndarray:
    """Eccentric anomaly (rad) for mean anomaly M (rad), Newton iteration."""
    E = M + e * np.sin(M)
    for _ in range(iterations):
        E = E - (E - e * np.sin(E) - M) / (1.0 - e * np.cos(E))
    return E


def planets_heliocentric(jd_tt: float) -> np.ndarray:
    """(9, 3) heliocentric ecliptic J2000 positions in AU, _PLANETS order."""
    T = (jd_tt - config.J2000_JD) / 36525.0
    el = _ELEMENTS_J2000 + _ELEMENT_RATES * T
    a, e = el[:, 0], el[:, 1]
    I, L, varpi, node = (np.radians(el[:, k]) for k in (2, 3, 4, 5))

    omega = varpi - node
    M = np.mod(L - varpi + np.pi, 2.0 * np.pi) - np.pi
    E = solve_kepler(M, e)

    xp = a * (np.cos(E) - e)
    yp = a * np.sqrt(1.0 - e * e) * np.sin(E)

    cw, sw = np.cos(omega), np.sin(omega)
    cn, sn = np.cos(node), np.sin(node)
    ci, si = np.cos(I), np.sin(I)

    x = (cw * cn - sw * sn * ci) * xp + (-sw * cn - cw * sn * ci) * yp
    y = (cw * sn + sw * cn * ci) * xp + (-sw * sn + cw * cn * ci) * yp
    z = (sw * si) * xp + (cw * si) * yp
    return np.stack([x, y, z], axis=1)


def ecliptic_to_cartesian(lon_deg: float, lat_deg: float, r: float) -> np.ndarray:
    lam, beta = math.radians(lon_deg), math.radians(lat_deg)
    return np.array([
        r * math.cos(beta) * math.cos(lam),
        r * math.cos(beta) * math.sin(lam),
        r * math.sin(beta),
    ])


@dataclass
class AnalyticProvider:
    name: str = "analytic"

    def earth(self, jd: float) -> EarthElements:
        sun = solar.solar_longitude(ts.jd_utc_to_jd_tt(jd))
        lon = math.radians((sun.L_true_deg + 180.0) % 360.0)
        return EarthElements(longitude_rad=lon, distance_au=sun.R_au, epoch_jd=jd)

    def moon(self, jd: float) -> MoonElements:
        jd_tt = ts.jd_utc_to_jd_tt(jd)
        m = lunar.lunar_position(jd_tt)
        sun = solar.solar_longitude(jd_tt)
        return MoonElements(
            distance_au=m.distance_km / config.AU_KM,
            latitude_deg=m.B_true_deg,
            longitude_deg=m.L_app_deg,
            sun_elongation_deg=lunar.sun_moon_separation_deg(m.L_app_deg, m.B_true_deg, sun.L_app_deg),
        )

    def sun(self, jd: float) -> SunElements:
        eq = solar.solar_equatorial(ts.jd_utc_to_jd_tt(jd))
        return SunElements(ra_hours=eq.ra_hours, dec_deg=eq.dec_deg, distance_au=eq.R_au)

    def bodies(self, jd: float) -> np.ndarray:
        jd_tt = ts.jd_utc_to_jd_tt(jd)
        out = np.zeros((len(Body), 3), dtype=np.float64)

        sun = solar.solar_longitude(jd_tt)
        out[Body.SUN] = ecliptic_to_cartesian(sun.L_app_deg, 0.0, sun.R_au)

        m = lunar.lunar_position(jd_tt)
        out[Body.MOON] = ecliptic_to_cartesian(m.L_app_deg, m.B_true_deg, m.distance_km / config.AU_KM)

        helio = planets_heliocentric(jd_tt)
        for i, body in enumerate(_PLANETS):
            out[body] = helio[i]
        # the solar series is sharper than the EMB elements for the Earth itself
        out[Body.EARTH] = ecliptic_to_cartesian(sun.L_true_deg + 180.0, 0.0, sun.R_au)
        return out
