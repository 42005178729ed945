"""
starscalendars.exchange.contract
--------------------------------
Layout and validation of the position buffer shared with the renderer.

  33 contiguous little-endian float64 = 11 bodies x (x, y, z), 264 bytes.
  Body order follows core.types.Body. Sun and Moon are geocentric, the
  planets heliocentric; ecliptic J2000 Cartesian, AU.

The view handed out is a read-only numpy array over the compute module's
memory; nothing is copied until extract_* is called.
"""

from __future__ import annotations

import math
from typing import Dict, Protocol, Tuple

import numpy as np

from starscalendars import config
from starscalendars.core.errors import ErrorKind, ExchangeError
from starscalendars.core.types import Body, Vec3

BODY_COUNT = 11
COORDINATES_PER_BODY = 3
COORDINATE_COUNT = BODY_COUNT * COORDINATES_PER_BODY      # 33
BYTES_PER_COORDINATE = 8
TOTAL_BUFFER_SIZE = COORDINATE_COUNT * BYTES_PER_COORDINATE  # 264

BUFFER_DTYPE = np.dtype("<f8")


class ComputeModule(Protocol):
    """What the runtime needs from a compute module."""
    memory: bytearray

    def compute_all(self, julian_day: float) -> int: ...
    def get_version(self) -> str: ...
    def get_body_count(self) -> int: ...
    def get_coordinate_count(self) -> int: ...


REQUIRED_EXPORTS: Tuple[str, ...] = (
    "memory",
    "compute_all",
    "get_version",
    "get_body_count",
    "get_coordinate_count",
)


# ============================================================
# Validation
# ============================================================

def validate_julian_day(jd: float) -> float:
    try:
        value = float(jd)
    except (TypeError, ValueError) as e:
        raise ExchangeError(ErrorKind.INVALID_JULIAN_DAY, f"Invalid Julian Day: {jd!r}") from e
    if not math.isfinite(value):
        raise ExchangeError(ErrorKind.INVALID_JULIAN_DAY, f"Invalid Julian Day: {value}")
    if value < config.MIN_JULIAN_DAY or value > config.MAX_JULIAN_DAY:
        raise ExchangeError(
            ErrorKind.INVALID_JULIAN_DAY,
            f"Julian Day {value} outside [{config.MIN_JULIAN_DAY}, {config.MAX_JULIAN_DAY}]",
            details={"julian_day": value},
        )
    return value


def validate_buffer(buf: np.ndarray) -> np.ndarray:
    if buf.size != COORDINATE_COUNT:
        raise ExchangeError(
            ErrorKind.BUFFER_SIZE_MISMATCH,
            f"Expected {COORDINATE_COUNT} coordinates, got {buf.size}",
        )
    if buf.nbytes != TOTAL_BUFFER_SIZE:
        raise ExchangeError(
            ErrorKind.BUFFER_SIZE_MISMATCH,
            f"Expected {TOTAL_BUFFER_SIZE} bytes, got {buf.nbytes}",
        )
    return buf


def positions_view(module: ComputeModule, ptr: int) -> np.ndarray:
    """Read-only view of the 33 coordinates at byte offset ptr of module.memory."""
    if ptr == 0:
        raise ExchangeError(ErrorKind.MEMORY_ACCESS_ERROR, "Null pointer returned from compute_all")

    size = len(module.memory)
    if ptr < 0 or ptr + TOTAL_BUFFER_SIZE > size:
        raise ExchangeError(
            ErrorKind.MEMORY_ACCESS_ERROR,
            f"Pointer {ptr} out of bounds (memory size: {size})",
            details={"ptr": ptr, "memory_size": size},
        )

    try:
        view = np.frombuffer(module.memory, dtype=BUFFER_DTYPE, count=COORDINATE_COUNT, offset=ptr)
    except (TypeError, ValueError) as e:
        raise ExchangeError(ErrorKind.MEMORY_ACCESS_ERROR, f"Memory access failed: {e}") from e
    view.flags.writeable = False
    return validate_buffer(view)


# ============================================================
# Extraction
# ============================================================

def extract_body_position(buf: np.ndarray, body: Body) -> Vec3:
    i = int(body) * COORDINATES_PER_BODY
    return Vec3(x=float(buf[i]), y=float(buf[i + 1]), z=float(buf[i + 2]))


def extract_all_positions(buf: np.ndarray) -> Dict[Body, Vec3]:
    validate_buffer(buf)
    return {body: extract_body_position(buf, body) for body in Body}
