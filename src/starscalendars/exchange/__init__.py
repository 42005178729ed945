"""Zero-copy exchange of body positions between the compute module and the renderer."""

from .contract import (
    BODY_COUNT,
    BYTES_PER_COORDINATE,
    COORDINATE_COUNT,
    COORDINATES_PER_BODY,
    TOTAL_BUFFER_SIZE,
    ComputeModule,
    extract_all_positions,
    extract_body_position,
    positions_view,
    validate_buffer,
    validate_julian_day,
)
from .runtime import compute_positions, get_module, initialize, is_ready, shutdown

__all__ = [
    "BODY_COUNT",
    "BYTES_PER_COORDINATE",
    "COORDINATE_COUNT",
    "COORDINATES_PER_BODY",
    "TOTAL_BUFFER_SIZE",
    "ComputeModule",
    "extract_all_positions",
    "extract_body_position",
    "positions_view",
    "validate_buffer",
    "validate_julian_day",
    "compute_positions",
    "get_module",
    "initialize",
    "is_ready",
    "shutdown",
]
