# tests/conftest.py

import math
from dataclasses import dataclass, field

import numpy as np
import pytest

import starscalendars
from starscalendars.core.types import EarthElements, MoonElements, SunElements
from starscalendars.exchange import runtime


@dataclass
class FakeProvider:
    """
    Smooth, deterministic stand-in for an ephemeris.

    Earth: eccentric orbit with perihelion on JD 2451547 (early January).
    Moon: 27.55 day anomalistic cycle, 29.53 day synodic cycle.
    """
    name: str = "fake"
    calls: dict = field(default_factory=lambda: {"earth": 0, "moon": 0, "sun": 0, "bodies": 0})

    def earth(self, jd):
        self.calls["earth"] += 1
        M = 2.0 * math.pi * (jd - 2451547.0) / 365.259636
        lon = (math.radians(102.9373) + M) % (2.0 * math.pi)
        return EarthElements(longitude_rad=lon, distance_au=1.0 - 0.0167 * math.cos(M), epoch_jd=jd)

    def moon(self, jd):
        self.calls["moon"] += 1
        anom = 2.0 * math.pi * (jd - 2451550.0) / 27.554550
        syn = (360.0 * (jd - 2451550.1) / 29.530588) % 360.0
        return MoonElements(
            distance_au=(385000.0 - 20000.0 * math.cos(anom)) / 149597870.7,
            latitude_deg=5.0 * math.sin(2.0 * math.pi * (jd - 2451545.0) / 27.2122),
            longitude_deg=(360.0 * (jd - 2451545.0) / 27.321661) % 360.0,
            sun_elongation_deg=min(syn, 360.0 - syn),
        )

    def sun(self, jd):
        self.calls["sun"] += 1
        return SunElements(ra_hours=18.0 + 49.0 / 60.0, dec_deg=-23.0, distance_au=0.9833)

    def bodies(self, jd):
        self.calls["bodies"] += 1
        return np.arange(33, dtype=np.float64).reshape(11, 3) * 0.25 + 1.0


class BrokenProvider(FakeProvider):
    def bodies(self, jd):
        raise ArithmeticError("ephemeris exploded")


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def broken_provider():
    return BrokenProvider()


@pytest.fixture(autouse=True)
def _reset_singletons():
    runtime.shutdown()
    starscalendars.set_provider(None)
    yield
    runtime.shutdown()
    starscalendars.set_provider(None)
