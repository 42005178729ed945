"""
starscalendars.config
---------------------
Project settings (constants + small helpers).

Units: milliseconds for calendar epochs, Julian days for astronomical time,
kilometres for scene positions, AU inside the exchange buffer.

A handful of values can be overridden from the environment; they are read once
at import time.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


# ============================================================
# Calendar table
# ============================================================

CALENDAR_ORIGIN_MS = 1344643200000.0          # 2012-08-11T00:00:00Z
CALENDAR_HORIZON_MS = 4090089600000.0         # construction stops here (~2099-08-11)
CALENDAR_DAY_MS = 86459178.082191780821918
CALENDAR_HALF_DAY_MS = 43229589.41095890410959
CALENDAR_DAYS_PER_YEAR = 365
CALENDAR_SPLICE = (11, 121)                   # (year, day) where two half days are inserted
CALENDAR_ANCHOR_UTC_HOUR = 20                 # midnight at UTC+4

# ============================================================
# Orbits
# ============================================================

AU_KM = 149597870.7
MS_PER_DAY = 86400000.0

PERIHELION_LON_J2000_DEG = 102.9373
PERIHELION_LON_RATE_DEG_PER_DAY = 0.000047082558678
MOON_LONGITUDE_OFFSET_DEG = 66.0

EARTH_WINDOW_SIZE = 1000
MOON_WINDOW_SIZE = 100
MOON_WINDOW_STEP_DAYS = 0.27321661            # sidereal month / 100
MOON_EXTREMUM_MAX_DAYS = 19
EARTH_RESCAN_MONTHS = (1, 7)
EARTH_RESCAN_DAY_LIMIT = 9                    # rescan while day-of-month < this

# ============================================================
# Moon phase
# ============================================================

SYNODIC_MONTH_DAYS = 29.530588
PHASE_WRAP_THRESHOLD_DEG = 100.0
PHASE_CALIBRATION_DEG = 0.6

# ============================================================
# Sub-solar point
# ============================================================

SUBSOLAR_RA_OFFSET_DEG = 91.0

# ============================================================
# Exchange contract
# ============================================================

MIN_JULIAN_DAY = 0.0
MAX_JULIAN_DAY = 5373484.5                    # ~ year 9999
J2000_JD = 2451545.0

CORE_MODULE = _env("STARSCALENDARS_CORE_MODULE", "starscalendars.exchange.core_module")

# ============================================================
# Ephemeris providers
# ============================================================

PROVIDER = _env("STARSCALENDARS_PROVIDER", "analytic")
EPHEMERIS_FILE = _env("STARSCALENDARS_EPHEMERIS", "de421.bsp")
DATA_DIR = Path(_env("STARSCALENDARS_DATA_DIR", str(Path.home() / ".starscalendars")))

# ============================================================
# Logging
# ============================================================

LOG_LEVEL = _env("STARSCALENDARS_LOG_LEVEL", "WARNING")
