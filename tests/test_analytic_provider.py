# tests/test_analytic_provider.py

import sys

import numpy as np
import pytest

from starscalendars.core.errors import EphemerisUnavailableError
from starscalendars.core.types import Body
from starscalendars.ephemeris import get_provider, require_ephemeris
from starscalendars.ephemeris.analytic import AnalyticProvider, planets_heliocentric, solve_kepler
from starscalendars.reference import lunar, solar


def test_meeus_example_47a_moon():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 47.a.
    1992 April 12, 0h TD: lambda 133.162655, beta -3.229126, Delta 368409.7 km.
    """
    m = lunar.lunar_position(2448724.5)
    assert m.L_true_deg == pytest.approx(133.162655, abs=0.01)
    assert m.B_true_deg == pytest.approx(-3.229126, abs=0.005)
    assert m.distance_km == pytest.approx(368409.7, abs=100.0)


def test_meeus_example_25a_sun():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 25.a.
    1992 October 13, 0h TD.
    """
    s = solar.solar_longitude(2448908.5)
    assert s.L_true_deg == pytest.approx(199.90988, abs=1e-4)
    assert s.L_app_deg == pytest.approx(199.90895, abs=1e-3)
    assert s.R_au == pytest.approx(0.99766, abs=1e-5)

    eq = solar.solar_equatorial(2448908.5)
    assert eq.ra_hours * 15.0 == pytest.approx(198.38083, abs=1e-3)
    assert eq.dec_deg == pytest.approx(-7.78507, abs=1e-3)


def test_separation_is_bounded():
    assert lunar.sun_moon_separation_deg(10.0, 0.0, 10.0) == pytest.approx(0.0, abs=1e-6)
    assert lunar.sun_moon_separation_deg(190.0, 0.0, 10.0) == pytest.approx(180.0)
    assert lunar.sun_moon_separation_deg(100.0, 5.0, 10.0) == pytest.approx(90.0, abs=1e-9)


def test_solve_kepler():
    M = np.array([0.0, 1.0, 3.0])
    e = np.array([0.0, 0.2, 0.9])
    E = solve_kepler(M, e)
    np.testing.assert_allclose(E - e * np.sin(E), M, atol=1e-12)


def test_planet_distances_are_plausible():
    helio = planets_heliocentric(2460310.5)
    r = np.linalg.norm(helio, axis=1)
    bounds = [
        (0.30, 0.47), (0.71, 0.73), (0.98, 1.02), (1.38, 1.67), (4.9, 5.5),
        (9.0, 10.1), (18.2, 20.1), (29.7, 30.4), (29.6, 49.4),
    ]
    for dist, (lo, hi) in zip(r, bounds):
        assert lo < dist < hi


def test_bodies_layout():
    p = AnalyticProvider()
    out = p.bodies(2451547.0)
    assert out.shape == (11, 3)
    assert out.dtype == np.float64
    assert np.all(np.isfinite(out))

    # early January: perihelion
    assert np.linalg.norm(out[Body.EARTH]) == pytest.approx(0.9833, abs=1e-3)
    # geocentric Sun is the heliocentric Earth reversed
    np.testing.assert_allclose(out[Body.SUN], -out[Body.EARTH], atol=1e-3)
    assert 0.0023 < np.linalg.norm(out[Body.MOON]) < 0.0028


def test_provider_elements():
    p = AnalyticProvider()
    jd = 2460310.5
    e = p.earth(jd)
    assert 0.0 <= e.longitude_rad < 2 * np.pi
    assert e.epoch_jd == jd
    m = p.moon(jd)
    assert 356000.0 < m.distance_au * 149597870.7 < 407000.0
    assert abs(m.latitude_deg) < 5.4
    s = p.sun(jd)
    # New Year: Sun near RA 18h45m, Dec -23
    assert s.ra_hours == pytest.approx(18.75, abs=0.1)
    assert s.dec_deg == pytest.approx(-23.0, abs=0.2)


def test_moon_elongation_tracks_syzygies():
    p = AnalyticProvider()
    # eclipse syzygies: new moon 2024-04-08 18:21 UTC, full moon 2024-03-25 07:00 UTC
    assert p.moon(2460409.265).sun_elongation_deg < 1.5
    assert p.moon(2460394.792).sun_elongation_deg > 178.0


def test_get_provider():
    assert isinstance(get_provider("analytic"), AnalyticProvider)
    assert get_provider("ANALYTIC").name == "analytic"
    with pytest.raises(KeyError):
        get_provider("ouija")


def test_require_ephemeris_reports_missing_extra(monkeypatch):
    monkeypatch.setitem(sys.modules, "skyfield", None)
    with pytest.raises(EphemerisUnavailableError) as ei:
        require_ephemeris()
    assert "starscalendars[ephemeris]" in str(ei.value)
