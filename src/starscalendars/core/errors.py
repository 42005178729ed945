from __future__ import annotations

import time
from enum import Enum
from typing import Any, Optional


class StarsCalendarsError(Exception):
    """Base error."""


class CalendarRangeError(StarsCalendarsError):
    """Raised when an instant falls outside the calendar table horizon."""


class EphemerisUnavailableError(StarsCalendarsError):
    """Raised when an optional ephemeris backend (e.g. skyfield) is not available."""


class ErrorKind(str, Enum):
    INITIALIZATION_FAILED = "INITIALIZATION_FAILED"
    MODULE_NOT_FOUND = "MODULE_NOT_FOUND"
    INVALID_JULIAN_DAY = "INVALID_JULIAN_DAY"
    COMPUTATION_FAILED = "COMPUTATION_FAILED"
    MEMORY_ACCESS_ERROR = "MEMORY_ACCESS_ERROR"
    BUFFER_SIZE_MISMATCH = "BUFFER_SIZE_MISMATCH"


class ExchangeError(StarsCalendarsError):
    """
    Failure at the compute-module boundary.

    Carries a machine-readable kind, a human-readable message and the wall-clock
    time (epoch seconds) at which it was raised.
    """

    def __init__(self, kind: ErrorKind, message: str, *, details: Optional[Any] = None):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message
        self.details = details
        self.timestamp = time.time()

    def __repr__(self) -> str:
        return f"ExchangeError(kind={self.kind.value}, message={self.message!r})"
