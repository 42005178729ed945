# tests/test_exchange.py

import math
import time

import numpy as np
import pytest

from starscalendars import config
from starscalendars.core.errors import ErrorKind, ExchangeError
from starscalendars.core.types import Body, Vec3
from starscalendars.exchange import contract
from starscalendars.exchange.core_module import BUFFER_OFFSET, CoreModule


def test_layout_constants():
    assert contract.BODY_COUNT == 11
    assert contract.COORDINATE_COUNT == 33
    assert contract.TOTAL_BUFFER_SIZE == 264
    assert contract.BUFFER_DTYPE.itemsize == contract.BYTES_PER_COORDINATE
    assert [b.name for b in Body][:5] == ["SUN", "MOON", "MERCURY", "VENUS", "EARTH"]


# ============================================================
# Buffer validation
# ============================================================

def test_wrong_length_buffer_is_rejected():
    with pytest.raises(ExchangeError) as ei:
        contract.validate_buffer(np.zeros(32))
    assert ei.value.kind is ErrorKind.BUFFER_SIZE_MISMATCH
    assert "33" in ei.value.message


def test_wrong_width_buffer_is_rejected():
    with pytest.raises(ExchangeError) as ei:
        contract.validate_buffer(np.zeros(33, dtype=np.float32))
    assert ei.value.kind is ErrorKind.BUFFER_SIZE_MISMATCH
    assert "264" in ei.value.message


def test_extract_rejects_bad_buffer():
    with pytest.raises(ExchangeError):
        contract.extract_all_positions(np.zeros(34))


@pytest.mark.parametrize("jd", [float("nan"), float("inf"), -float("inf"), -1.0, config.MAX_JULIAN_DAY + 0.1, "abc", None])
def test_invalid_julian_days(jd):
    with pytest.raises(ExchangeError) as ei:
        contract.validate_julian_day(jd)
    assert ei.value.kind is ErrorKind.INVALID_JULIAN_DAY


def test_julian_day_bounds_are_inclusive():
    assert contract.validate_julian_day(0.0) == 0.0
    assert contract.validate_julian_day(config.MAX_JULIAN_DAY) == config.MAX_JULIAN_DAY
    assert contract.validate_julian_day(2451545) == 2451545.0


# ============================================================
# Memory views
# ============================================================

def test_null_pointer_is_rejected(fake_provider):
    m = CoreModule(fake_provider)
    with pytest.raises(ExchangeError) as ei:
        contract.positions_view(m, 0)
    assert ei.value.kind is ErrorKind.MEMORY_ACCESS_ERROR


@pytest.mark.parametrize("ptr", [-8, 1000, 1024, 10**9])
def test_out_of_bounds_pointer_is_rejected(fake_provider, ptr):
    m = CoreModule(fake_provider)
    with pytest.raises(ExchangeError) as ei:
        contract.positions_view(m, ptr)
    assert ei.value.kind is ErrorKind.MEMORY_ACCESS_ERROR
    assert ei.value.details["memory_size"] == len(m.memory)


def test_all_bodies_round_trip(fake_provider):
    m = CoreModule(fake_provider)
    ptr = m.compute_all(2451545.0)
    assert ptr == BUFFER_OFFSET

    view = contract.positions_view(m, ptr)
    expected = fake_provider.bodies(2451545.0)
    np.testing.assert_array_equal(view.reshape(11, 3), expected)

    positions = contract.extract_all_positions(view)
    assert list(positions) == list(Body)
    for body in Body:
        assert positions[body] == Vec3(*expected[int(body)])
    assert positions[Body.EARTH] == Vec3(4.0, 4.25, 4.5)


def test_view_is_read_only_and_aliases_memory(fake_provider):
    m = CoreModule(fake_provider)
    view = contract.positions_view(m, m.compute_all(2451545.0))
    with pytest.raises(ValueError):
        view[0] = 42.0

    # the view is not a copy: the next compute writes through it
    m.memory[BUFFER_OFFSET:BUFFER_OFFSET + 8] = np.float64(-7.5).tobytes()
    assert view[0] == -7.5


# ============================================================
# Core module
# ============================================================

def test_compute_all_rejects_invalid_input(fake_provider):
    m = CoreModule(fake_provider)
    assert m.compute_all(float("nan")) == 0
    assert m.compute_all(-5.0) == 0
    assert fake_provider.calls["bodies"] == 0


def test_compute_all_survives_provider_failure(broken_provider):
    m = CoreModule(broken_provider)
    assert m.compute_all(2451545.0) == 0


def test_core_module_exports(fake_provider):
    m = CoreModule(fake_provider)
    assert m.get_body_count() == 11
    assert m.get_coordinate_count() == 33
    assert isinstance(m.get_version(), str) and m.get_version()
    assert m.get_mean_obliquity(2451545.0) == pytest.approx(23.4392794, abs=1e-6)
    assert 0.0 <= m.get_apparent_sidereal_time(2451545.0) < 360.0
    assert m.next_winter_solstice_from(2460310.5) > 2460310.5


def test_core_module_rejects_bad_layout(fake_provider):
    with pytest.raises(ValueError):
        CoreModule(fake_provider, offset=0)
    with pytest.raises(ValueError):
        CoreModule(fake_provider, memory_size=256)


# ============================================================
# Errors
# ============================================================

def test_exchange_error_fields():
    before = time.time()
    e = ExchangeError(ErrorKind.COMPUTATION_FAILED, "boom", details={"julian_day": 1.0})
    assert e.kind is ErrorKind.COMPUTATION_FAILED
    assert e.message == "boom"
    assert e.details == {"julian_day": 1.0}
    assert before <= e.timestamp <= time.time()
    assert str(e) == "COMPUTATION_FAILED: boom"
    assert ErrorKind("MODULE_NOT_FOUND") is ErrorKind.MODULE_NOT_FOUND
    assert not math.isnan(e.timestamp)
