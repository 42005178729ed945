"""
starscalendars.engines.frame
----------------------------
One frame of celestial state: the single per-frame call the renderer makes.

FrameDriver.step advances the extrema trackers and the phase memory exactly
once, so calling it twice for the same rendered frame is a bug.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from starscalendars.core.engine import EngineState
from starscalendars.core.errors import ErrorKind, ExchangeError
from starscalendars.core.time import as_utc, datetime_utc_to_jd
from starscalendars.core.types import CelestialState, PhaseState
from starscalendars.engines import calendar, orbital, phase, subsolar
from starscalendars.ephemeris import EphemerisProvider
from starscalendars.exchange import contract, runtime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    state: Optional[CelestialState] = None
    error: Optional[ExchangeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class FrameDriver:
    provider: EphemerisProvider
    state: EngineState = field(default_factory=EngineState)
    module: Optional[contract.ComputeModule] = None

    def _module(self) -> contract.ComputeModule:
        if self.module is None:
            self.module = runtime.initialize(self.provider)
        return self.module

    def step(self, instant: datetime) -> FrameResult:
        """
        Compute one frame. Exchange and ephemeris provider failures come back
        in the result; CalendarRangeError and naive datetimes propagate.
        """
        instant = as_utc(instant)
        cal = calendar.convert(self.state.calendar, instant)
        jd = datetime_utc_to_jd(instant)

        try:
            view = runtime.compute_positions(jd, self._module())
        except ExchangeError as e:
            logger.warning("frame at %s skipped: %s", instant.isoformat(), e)
            return FrameResult(error=e)

        positions = tuple(contract.extract_all_positions(view).values())

        try:
            orbital.refresh_trackers(self.state, self.provider, instant)
            earth_el = self.provider.earth(jd)
            moon_el = self.provider.moon(jd)
            sun_el = self.provider.sun(jd)
        except Exception as e:
            err = ExchangeError(
                ErrorKind.COMPUTATION_FAILED,
                f"ephemeris provider failed at JD {jd}: {e}",
                details={"julian_day": jd},
            )
            logger.warning("frame at %s skipped: %s", instant.isoformat(), err)
            return FrameResult(error=err)

        earth = orbital.earth_position(earth_el, instant, self.state.earth_tracker)
        moon = orbital.moon_position(moon_el, instant, self.state.moon_tracker)

        if self.state.phase is None:
            self.state.phase = PhaseState.primed(moon.elongation_deg)
        moon_phase = phase.classify(self.state.phase, moon.elongation_deg, instant)

        zenith = subsolar.zenith(sun_el.ra_hours, sun_el.dec_deg, instant)

        return FrameResult(
            state=CelestialState(
                instant=instant,
                julian_day=jd,
                positions=positions,
                earth=earth,
                moon=moon,
                phase=moon_phase,
                subsolar=zenith,
                earth_sun_distance_au=earth_el.distance_au,
                calendar=cal,
            )
        )
