"""
starscalendars.engines.subsolar
-------------------------------
The sub-solar (zenith) point: where on Earth the Sun stands overhead.

Also hosts the two sidereal-time helpers the compute module exports
(mean obliquity and apparent sidereal time).
"""

from __future__ import annotations

import math
from datetime import datetime

from starscalendars import config
from starscalendars.core.time import as_utc
from starscalendars.core.types import SubsolarPoint, Vec3
from starscalendars.reference import astro_args as aa


# ============================================================
# Time
# ============================================================

def julian_date(instant: datetime) -> float:
    """
    Julian Date from UTC calendar fields (Meeus, ch. 7).

    January and February count as months 13 and 14 of the previous year.
    """
    t = as_utc(instant)
    year, month = t.year, t.month
    if month <= 2:
        year -= 1
        month += 12
    A = math.floor(year / 100)
    B = 2 - A + math.floor(A / 4)
    day_fraction = (t.hour + (t.minute + (t.second + t.microsecond / 1e6) / 60.0) / 60.0) / 24.0
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + t.day
        + day_fraction
        + B
        - 1524.5
    )


def greenwich_sidereal_time_deg(jd: float) -> float:
    """Greenwich mean sidereal time in degrees [0,360) (Meeus 12.4)."""
    d = jd - config.J2000_JD
    T = d / 36525.0
    gst = 280.46061837 + 360.98564736629 * d + 0.000387933 * T * T - T ** 3 / 38710000.0
    gst = gst % 360.0
    if gst < 0:
        gst += 360.0
    return gst


def mean_obliquity_deg(jd: float) -> float:
    """Mean obliquity of the ecliptic at jd (IAU 2000 polynomial)."""
    return aa.mean_obliquity_deg(aa.T_centuries(jd))


def apparent_sidereal_time_deg(jd: float) -> float:
    """Mean sidereal time plus the equation of the equinoxes, [0,360)."""
    T = aa.T_centuries(jd)
    nut = aa.nutation(T)
    eps_true = aa.mean_obliquity_deg(T) + nut.deps_deg
    eq_equinoxes = nut.dpsi_deg * math.cos(math.radians(eps_true))
    return aa.wrap_deg(greenwich_sidereal_time_deg(jd) + eq_equinoxes)


# ============================================================
# Sub-solar point
# ============================================================

def zenith(ra_hours: float, dec_deg: float, instant: datetime) -> SubsolarPoint:
    """
    Sub-solar point from the Sun's apparent RA/Dec.

    The longitude carries a fixed 91 degree offset that aligns it with the
    globe texture seam; it is not a geographic longitude in the strict sense.
    """
    gst = greenwich_sidereal_time_deg(julian_date(instant))
    ra_deg = ra_hours * 15.0
    longitude = (gst - (ra_deg - config.SUBSOLAR_RA_OFFSET_DEG) + 360.0) % 360.0
    return SubsolarPoint(latitude=dec_deg, longitude=longitude, gst_deg=gst)


def to_sphere(latitude: float, longitude: float, radius: float = 1.0) -> Vec3:
    """Latitude/longitude (degrees) to y-up Cartesian on a sphere of the given radius."""
    phi = math.radians(90.0 - latitude)
    theta = math.radians(longitude + 180.0)
    return Vec3(
        x=radius * math.sin(phi) * math.cos(theta),
        y=radius * math.cos(phi),
        z=radius * math.sin(phi) * math.sin(theta),
    )
