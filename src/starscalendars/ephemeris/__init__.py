"""Ephemeris providers.

The core never computes raw orbital elements itself; it asks a provider.
Two providers ship with the package:

  analytic   truncated Meeus series + JPL Keplerian elements (numpy only)
  skyfield   JPL DE ephemeris through skyfield; install with
               pip install "starscalendars[ephemeris]"
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import numpy as np

from starscalendars import config
from starscalendars.core.errors import EphemerisUnavailableError
from starscalendars.core.types import EarthElements, MoonElements, SunElements

logger = logging.getLogger(__name__)


class EphemerisProvider(Protocol):
    """All times are JD (UTC)."""
    name: str

    def earth(self, jd: float) -> EarthElements: ...
    def moon(self, jd: float) -> MoonElements: ...
    def sun(self, jd: float) -> SunElements: ...
    def bodies(self, jd: float) -> np.ndarray:
        """(11, 3) ecliptic Cartesian positions in AU, Body order."""
        ...


def require_ephemeris() -> None:
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import skyfield  # noqa: F401
    except ImportError as e:
        raise EphemerisUnavailableError(
            'Ephemeris support requires: pip install "starscalendars[ephemeris]"'
        ) from e


def get_provider(name: Optional[str] = None) -> EphemerisProvider:
    """Build a provider by name (defaults to config.PROVIDER)."""
    name = (name or config.PROVIDER).lower()
    logger.debug("loading ephemeris provider %r", name)
    if name == "analytic":
        from .analytic import AnalyticProvider
        return AnalyticProvider()
    if name == "skyfield":
        from .skyfield_provider import SkyfieldProvider
        return SkyfieldProvider.load()
    raise KeyError(f"Unknown ephemeris provider '{name}'. Available: ['analytic', 'skyfield']")
