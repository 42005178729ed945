# tests/test_calendar.py

from datetime import date, datetime, timezone

import pytest

from starscalendars import config
from starscalendars.core.engine import EngineState
from starscalendars.core.errors import CalendarRangeError
from starscalendars.core.time import from_epoch_ms
from starscalendars.engines import calendar as cal


@pytest.fixture(scope="module")
def table():
    return cal.default_table()


def test_table_starts_at_origin(table):
    first = table.first
    assert first.epoch_ms == config.CALENDAR_ORIGIN_MS
    assert (first.year_index, first.day_index) == (0, 0)
    assert table.last.epoch_ms < config.CALENDAR_HORIZON_MS


def test_table_strictly_increasing(table):
    keys = [e.epoch_ms for e in table.entries]
    assert all(b > a for a, b in zip(keys, keys[1:]))


def test_no_duplicate_days(table):
    pairs = [(e.year_index, e.day_index) for e in table.entries]
    assert len(set(pairs)) == len(pairs)


def test_day_index_wraps_into_next_year(table):
    for a, b in zip(table.entries, table.entries[1:]):
        if a.day_index == 364:
            assert (b.year_index, b.day_index) == (a.year_index + 1, 0)
        else:
            assert (b.year_index, b.day_index) == (a.year_index, a.day_index + 1)


def test_year_11_splice(table):
    by_key = {(e.year_index, e.day_index): e for e in table.entries}
    d121, d122, d123, d124 = (by_key[(11, d)] for d in (121, 122, 123, 124))

    assert d122.epoch_ms - d121.epoch_ms == pytest.approx(config.CALENDAR_HALF_DAY_MS)
    assert d123.epoch_ms - d122.epoch_ms == pytest.approx(config.CALENDAR_HALF_DAY_MS)
    assert d124.epoch_ms - d123.epoch_ms == pytest.approx(config.CALENDAR_DAY_MS)

    # elsewhere the cadence is regular
    d120 = by_key[(11, 120)]
    assert d121.epoch_ms - d120.epoch_ms == pytest.approx(config.CALENDAR_DAY_MS)


def test_floor_semantics_between_entries(table):
    for k in (0, 1, 500, 4136, len(table) - 2):
        a, b = table.entries[k], table.entries[k + 1]
        mid = 0.5 * (a.epoch_ms + b.epoch_ms)
        assert table.lookup(mid) == a
        assert table.lookup(b.epoch_ms - 1.0) == a
        # ties resolve to the later entry
        assert table.lookup(b.epoch_ms) == b


def test_out_of_range_is_rejected(table):
    with pytest.raises(CalendarRangeError):
        table.lookup(config.CALENDAR_ORIGIN_MS - 1.0)
    with pytest.raises(CalendarRangeError):
        table.lookup(config.CALENDAR_HORIZON_MS)
    with pytest.raises(CalendarRangeError):
        cal.convert(table, datetime(2150, 1, 1, tzinfo=timezone.utc))
    with pytest.raises(CalendarRangeError):
        cal.convert(table, datetime(2000, 1, 1, tzinfo=timezone.utc))


def test_naive_datetime_is_rejected(table):
    with pytest.raises(ValueError):
        cal.convert(table, datetime(2020, 1, 1))


def test_display_format():
    assert cal.format_display(0, 0) == "00.00.00"
    assert cal.format_display(123, 11) == "03.12.11"
    assert cal.format_display(364, 7) == "04.36.07"
    assert cal.format_display(5, 105) == "05.00.05"


def test_convert_origin_and_decads(table):
    origin = from_epoch_ms(config.CALENDAR_ORIGIN_MS)
    cd = cal.convert(table, origin)
    assert cd.display == "00.00.00"
    assert (cd.year, cd.decad, cd.day_in_decad, cd.day_index) == (0, 0, 0, 0)

    e = table.entries[37]
    cd = cal.convert(table, from_epoch_ms(e.epoch_ms + 1000.0))
    assert (cd.decad, cd.day_in_decad) == (3, 7)
    assert cd.display == "07.03.00"


def test_anchor_instant_is_20h_utc():
    t = cal.anchor_instant(date(2024, 3, 1))
    assert t == datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)


def test_convert_date_uses_anchor(table):
    # 2012-08-11 20:00 UTC is still the first calendar day
    assert cal.convert_date(table, date(2012, 8, 11)).display == "00.00.00"


def test_table_is_built_once():
    assert cal.default_table() is cal.default_table()
    state = EngineState()
    assert state.calendar is state.calendar
    assert state.calendar is cal.default_table()


def test_custom_build_small_table():
    t = cal.CalendarTable.build(origin_ms=0.0, horizon_ms=10.5, day_ms=1.0, half_day_ms=0.5,
                                days_per_year=4, splice=(1, 1))
    got = [(e.epoch_ms, e.year_index, e.day_index) for e in t.entries]
    assert got[:8] == [
        (0.0, 0, 0), (1.0, 0, 1), (2.0, 0, 2), (3.0, 0, 3),
        (4.0, 1, 0), (5.0, 1, 1), (5.5, 1, 2), (6.0, 1, 3),
    ]
    assert got[8] == (7.0, 2, 0)
