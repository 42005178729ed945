"""
starscalendars.engines.orbital
------------------------------
Scene positions of the Earth (around the Sun) and the Moon (around the Earth)
from provider elements, plus the apogee/perigee bookkeeping that drives the
"direction of travel" readout.

Positions are in kilometres in the scene's y-up frame.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from typing import List, Optional

from starscalendars import config
from starscalendars.core.engine import EngineState
from starscalendars.core.time import as_utc, datetime_utc_to_jd
from starscalendars.core.types import (
    EarthElements,
    EarthPosition,
    ExtremaTracker,
    ExtremumSample,
    MoonElements,
    MoonPosition,
    Vec3,
)

logger = logging.getLogger(__name__)


# ============================================================
# Positions
# ============================================================

def perihelion_longitude_rad(epoch_jd: float) -> float:
    deg = config.PERIHELION_LON_J2000_DEG + config.PERIHELION_LON_RATE_DEG_PER_DAY * (epoch_jd - config.J2000_JD)
    return math.radians(deg)


def earth_xyz(elements: EarthElements) -> Vec3:
    nu = elements.longitude_rad - perihelion_longitude_rad(elements.epoch_jd)
    d = elements.distance_au * config.AU_KM
    return Vec3(x=-(d * math.cos(nu)), y=0.0, z=-(d * math.sin(nu)))


def moon_xyz(elements: MoonElements) -> Vec3:
    d = elements.distance_au * config.AU_KM
    beta = math.radians(elements.latitude_deg)
    lam = math.radians(elements.longitude_deg + config.MOON_LONGITUDE_OFFSET_DEG)
    return Vec3(
        x=d * math.cos(beta) * math.cos(lam),
        y=d * math.sin(beta),
        z=d * math.cos(beta) * math.sin(lam),
    )


def reference_extremum(tracker: ExtremaTracker, instant: datetime) -> Optional[ExtremumSample]:
    """
    The extremum the body is travelling away from: the perigee once it has
    been passed after the apogee, otherwise the apogee. None before a scan.
    """
    if not tracker.populated:
        return None
    if instant >= tracker.perigee.timestamp and tracker.apogee.timestamp < tracker.perigee.timestamp:
        return tracker.perigee
    return tracker.apogee


def direction(tracker: ExtremaTracker, instant: datetime) -> Optional[bool]:
    """True when leaving perigee, False when leaving apogee, None if unknown."""
    ref = reference_extremum(tracker, instant)
    if ref is None:
        return None
    return ref is tracker.perigee


def earth_position(elements: EarthElements, instant: datetime, tracker: ExtremaTracker) -> EarthPosition:
    instant = as_utc(instant)
    nu = elements.longitude_rad - perihelion_longitude_rad(elements.epoch_jd)
    return EarthPosition(
        position=earth_xyz(elements),
        direction=direction(tracker, instant),
        true_anomaly=nu,
        longitude=elements.longitude_rad,
    )


def days_since_extremum(tracker: ExtremaTracker, instant: datetime) -> Optional[int]:
    ref = reference_extremum(tracker, instant)
    if ref is None:
        return None
    days = math.floor((instant - ref.timestamp) / timedelta(days=1))
    if days < 0 or days > config.MOON_EXTREMUM_MAX_DAYS:
        return 0
    return days


def moon_position(elements: MoonElements, instant: datetime, tracker: ExtremaTracker) -> MoonPosition:
    instant = as_utc(instant)
    return MoonPosition(
        position=moon_xyz(elements),
        elongation_deg=elements.sun_elongation_deg,
        direction=direction(tracker, instant),
        days_since_extremum=days_since_extremum(tracker, instant),
    )


# ============================================================
# Sample windows
# ============================================================

def days_in_year(year: int) -> int:
    leap = (year % 4 == 0 and year % 100 != 0) or year % 400 == 0
    return 366 if leap else 365


def _window(sample, instant: datetime, count: int, step: timedelta) -> List[ExtremumSample]:
    first = ExtremumSample(position=sample(instant), timestamp=instant)
    out = [first]
    t = instant - step
    for _ in range(1, count):
        out.append(ExtremumSample(position=sample(t), timestamp=t))
        t = t - step
    # closes the orbit trace
    out.append(first)
    return out


def earth_window(provider, instant: datetime, count: int = config.EARTH_WINDOW_SIZE) -> List[ExtremumSample]:
    """count samples going back one calendar-year length, then the first again."""
    instant = as_utc(instant)
    step = timedelta(days=days_in_year(instant.year) / count)
    return _window(lambda t: earth_xyz(provider.earth(datetime_utc_to_jd(t))), instant, count, step)


def moon_window(provider, instant: datetime, count: int = config.MOON_WINDOW_SIZE) -> List[ExtremumSample]:
    """count samples at 1/100 sidereal month going back, then the first again."""
    instant = as_utc(instant)
    step = timedelta(days=config.MOON_WINDOW_STEP_DAYS)
    return _window(lambda t: moon_xyz(provider.moon(datetime_utc_to_jd(t))), instant, count, step)


# ============================================================
# Rate-limited refresh
# ============================================================

def earth_scan_due(tracker: ExtremaTracker, today: date) -> bool:
    """Once per day, and only near perihelion/aphelion once populated."""
    if tracker.last_scan == today:
        return False
    if not tracker.populated:
        return True
    return today.month in config.EARTH_RESCAN_MONTHS and today.day < config.EARTH_RESCAN_DAY_LIMIT


def moon_scan_due(tracker: ExtremaTracker, today: date) -> bool:
    return tracker.last_scan != today


def refresh_trackers(state: EngineState, provider, instant: datetime) -> bool:
    """
    Rescan the extrema windows on a UTC calendar-day rollover.
    Returns True when any tracker was rescanned.
    """
    instant = as_utc(instant)
    today = instant.date()
    scanned = False

    if moon_scan_due(state.moon_tracker, today):
        state.moon_tracker.rescan(moon_window(provider, instant), scanned_on=today)
        logger.debug("moon extrema rescanned for %s", today)
        scanned = True

    if earth_scan_due(state.earth_tracker, today):
        state.earth_tracker.rescan(earth_window(provider, instant), scanned_on=today)
        logger.debug("earth extrema rescanned for %s", today)
        scanned = True

    return scanned
