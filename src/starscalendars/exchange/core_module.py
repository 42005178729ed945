"""
starscalendars.exchange.core_module
-----------------------------------
In-process compute module.

Owns a fixed memory region and writes the 33 coordinates into it through a
numpy view allocated once. compute_all returns the byte offset of the buffer,
or 0 (never a valid offset) when the input is rejected or the provider fails.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from starscalendars import __version__, config
from starscalendars.engines import solstice, subsolar
from starscalendars.ephemeris import EphemerisProvider, get_provider

from .contract import BUFFER_DTYPE, BODY_COUNT, COORDINATE_COUNT, TOTAL_BUFFER_SIZE

logger = logging.getLogger(__name__)

MEMORY_SIZE = 1024
BUFFER_OFFSET = 64  # offset 0 is reserved as the null pointer


class CoreModule:
    def __init__(self, provider: EphemerisProvider, *, memory_size: int = MEMORY_SIZE, offset: int = BUFFER_OFFSET):
        if offset <= 0 or offset + TOTAL_BUFFER_SIZE > memory_size:
            raise ValueError(f"buffer at offset {offset} does not fit in {memory_size} bytes")
        self.provider = provider
        self.memory = bytearray(memory_size)
        self._offset = offset
        self._buffer = np.frombuffer(self.memory, dtype=BUFFER_DTYPE, count=COORDINATE_COUNT, offset=offset)

    # ---------------------------------------------------------
    # Exports
    # ---------------------------------------------------------

    def compute_all(self, julian_day: float) -> int:
        if not math.isfinite(julian_day) or not (config.MIN_JULIAN_DAY <= julian_day <= config.MAX_JULIAN_DAY):
            logger.warning("Invalid Julian Day: %s", julian_day)
            return 0
        try:
            positions = np.asarray(self.provider.bodies(julian_day), dtype=np.float64)
            self._buffer[:] = positions.reshape(COORDINATE_COUNT)
        except Exception:
            logger.exception("compute_all failed at JD %s", julian_day)
            return 0
        return self._offset

    def get_version(self) -> str:
        return __version__

    def get_body_count(self) -> int:
        return BODY_COUNT

    def get_coordinate_count(self) -> int:
        return COORDINATE_COUNT

    def get_mean_obliquity(self, julian_day: float) -> float:
        return subsolar.mean_obliquity_deg(julian_day)

    def get_apparent_sidereal_time(self, julian_day: float) -> float:
        return subsolar.apparent_sidereal_time_deg(julian_day)

    def next_winter_solstice_from(self, julian_day: float) -> float:
        return solstice.next_winter_solstice(julian_day)


def load(provider: Optional[EphemerisProvider] = None) -> CoreModule:
    """Module factory looked up by the runtime."""
    return CoreModule(provider if provider is not None else get_provider())
