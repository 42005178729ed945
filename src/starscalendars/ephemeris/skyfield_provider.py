"""
starscalendars.ephemeris.skyfield_provider
------------------------------------------
JPL DE ephemeris through skyfield.

Requires optional deps:
  pip install "starscalendars[ephemeris]"

The kernel (config.EPHEMERIS_FILE, de421.bsp by default) is downloaded into
config.DATA_DIR on first use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

import numpy as np

from starscalendars import config
from starscalendars.core.errors import EphemerisUnavailableError
from starscalendars.core.types import Body, EarthElements, MoonElements, SunElements

logger = logging.getLogger(__name__)

_TARGETS: Dict[Body, str] = {
    Body.MERCURY: "mercury barycenter",
    Body.VENUS: "venus barycenter",
    Body.EARTH: "earth",
    Body.MARS: "mars barycenter",
    Body.JUPITER: "jupiter barycenter",
    Body.SATURN: "saturn barycenter",
    Body.URANUS: "uranus barycenter",
    Body.NEPTUNE: "neptune barycenter",
    Body.PLUTO: "pluto barycenter",
}


@dataclass
class SkyfieldProvider:
    ts: Any
    eph: Any
    name: str = "skyfield"

    @classmethod
    def load(cls, ephemeris_file: str = config.EPHEMERIS_FILE) -> "SkyfieldProvider":
        try:
            from skyfield.api import Loader  # type: ignore
        except ImportError as e:
            raise EphemerisUnavailableError(
                "skyfield not available. Install extras:\n"
                "  pip install \"starscalendars[ephemeris]\""
            ) from e

        config.DATA_DIR.mkdir(parents=True, exist_ok=True)
        loader = Loader(str(config.DATA_DIR))
        logger.info("loading %s from %s", ephemeris_file, config.DATA_DIR)
        return cls(ts=loader.timescale(), eph=loader(ephemeris_file))

    def _time(self, jd: float):
        # UT1-UTC (< 0.9 s) is ignored
        return self.ts.ut1_jd(jd)

    def earth(self, jd: float) -> EarthElements:
        from skyfield.framelib import ecliptic_frame  # type: ignore

        t = self._time(jd)
        helio = (self.eph["earth"] - self.eph["sun"]).at(t)
        _, lon, dist = helio.frame_latlon(ecliptic_frame)
        return EarthElements(longitude_rad=lon.radians, distance_au=dist.au, epoch_jd=jd)

    def moon(self, jd: float) -> MoonElements:
        from skyfield.framelib import ecliptic_frame  # type: ignore

        t = self._time(jd)
        here = self.eph["earth"].at(t)
        moon = here.observe(self.eph["moon"]).apparent()
        sun = here.observe(self.eph["sun"]).apparent()
        lat, lon, dist = moon.frame_latlon(ecliptic_frame)
        return MoonElements(
            distance_au=dist.au,
            latitude_deg=lat.degrees,
            longitude_deg=lon.degrees,
            sun_elongation_deg=moon.separation_from(sun).degrees,
        )

    def sun(self, jd: float) -> SunElements:
        t = self._time(jd)
        sun = self.eph["earth"].at(t).observe(self.eph["sun"]).apparent()
        ra, dec, dist = sun.radec(epoch="date")
        return SunElements(ra_hours=ra.hours, dec_deg=dec.degrees, distance_au=dist.au)

    def bodies(self, jd: float) -> np.ndarray:
        from skyfield.framelib import ecliptic_J2000_frame  # type: ignore

        t = self._time(jd)
        out = np.zeros((len(Body), 3), dtype=np.float64)
        sun, earth = self.eph["sun"], self.eph["earth"]
        out[Body.SUN] = (sun - earth).at(t).frame_xyz(ecliptic_J2000_frame).au
        out[Body.MOON] = (self.eph["moon"] - earth).at(t).frame_xyz(ecliptic_J2000_frame).au
        for body, key in _TARGETS.items():
            out[body] = (self.eph[key] - sun).at(t).frame_xyz(ecliptic_J2000_frame).au
        return out
