from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import IntEnum
from typing import Optional, Sequence, Tuple

import numpy as np


class Body(IntEnum):
    """Celestial bodies in exchange-buffer order."""
    SUN = 0
    MOON = 1
    MERCURY = 2
    VENUS = 3
    EARTH = 4
    MARS = 5
    JUPITER = 6
    SATURN = 7
    URANUS = 8
    NEPTUNE = 9
    PLUTO = 10


@dataclass(frozen=True)
class Vec3:
    x: float
    y: float
    z: float

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


# ============================================================
# Calendar
# ============================================================

@dataclass(frozen=True)
class CalendarEntry:
    epoch_ms: float
    day_index: int
    year_index: int


@dataclass(frozen=True)
class CalendarDate:
    year: int
    decad: int
    day_in_decad: int
    day_index: int
    display: str


# ============================================================
# Raw ephemeris elements (owned by the provider)
# ============================================================

@dataclass(frozen=True)
class EarthElements:
    longitude_rad: float   # heliocentric ecliptic longitude
    distance_au: float
    epoch_jd: float


@dataclass(frozen=True)
class MoonElements:
    distance_au: float
    latitude_deg: float
    longitude_deg: float
    sun_elongation_deg: float  # Moon-Sun angular separation, [0, 180]


@dataclass(frozen=True)
class SunElements:
    ra_hours: float
    dec_deg: float
    distance_au: float


# ============================================================
# Orbital state
# ============================================================

@dataclass(frozen=True)
class ExtremumSample:
    position: Vec3
    timestamp: datetime


@dataclass
class ExtremaTracker:
    """Apogee/perigee of the most recent sample window. Mutated only by rescan()."""
    apogee: Optional[ExtremumSample] = None
    perigee: Optional[ExtremumSample] = None
    max_distance: float = 0.0
    min_distance: float = math.inf
    last_scan: Optional[date] = None

    @property
    def populated(self) -> bool:
        return self.apogee is not None and self.perigee is not None

    def rescan(self, samples: Sequence[ExtremumSample], *, scanned_on: Optional[date] = None) -> None:
        """
        Replace both extrema with the farthest and nearest sample of the window.
        Ties keep the first occurrence.
        """
        if not samples:
            raise ValueError("rescan needs at least one sample")
        pts = np.array([s.position.as_tuple() for s in samples], dtype=np.float64)
        dist = np.linalg.norm(pts, axis=1)
        i_max = int(np.argmax(dist))
        i_min = int(np.argmin(dist))
        self.apogee = samples[i_max]
        self.perigee = samples[i_min]
        self.max_distance = float(dist[i_max])
        self.min_distance = float(dist[i_min])
        self.last_scan = scanned_on


@dataclass(frozen=True)
class EarthPosition:
    position: Vec3
    direction: Optional[bool]  # None until the tracker has been scanned
    true_anomaly: float        # radians
    longitude: float           # radians


@dataclass(frozen=True)
class MoonPosition:
    position: Vec3
    elongation_deg: float
    direction: Optional[bool]
    days_since_extremum: Optional[int]


# ============================================================
# Moon phase
# ============================================================

@dataclass
class PhaseState:
    previous_elongation: float = 0.0
    previous_increasing: bool = False

    @classmethod
    def primed(cls, elongation_deg: float) -> "PhaseState":
        return cls(previous_elongation=elongation_deg, previous_increasing=False)


@dataclass(frozen=True)
class MoonPhase:
    bucket: int            # 0..7
    age_days: float
    is_increasing: bool
    elongation_deg: float


# ============================================================
# Sub-solar point
# ============================================================

@dataclass(frozen=True)
class SubsolarPoint:
    latitude: float        # degrees, N-positive
    longitude: float       # degrees, [0, 360)
    gst_deg: float

    @property
    def latitude_rad(self) -> float:
        return math.radians(self.latitude)

    @property
    def longitude_rad(self) -> float:
        return math.radians(self.longitude)


# ============================================================
# Frame output
# ============================================================

@dataclass(frozen=True)
class CelestialState:
    """Everything the renderer needs for one frame. Not retained by the core."""
    instant: datetime
    julian_day: float
    positions: Tuple[Vec3, ...]
    earth: EarthPosition
    moon: MoonPosition
    phase: MoonPhase
    subsolar: SubsolarPoint
    earth_sun_distance_au: float
    calendar: CalendarDate

    def position_of(self, body: Body) -> Vec3:
        return self.positions[int(body)]
