from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union

from .core.engine import EngineState
from .core.time import as_utc, datetime_utc_to_jd, jd_to_datetime_utc
from .core.types import CalendarDate, MoonPhase, PhaseState, SubsolarPoint
from .engines import calendar as _calendar
from .engines import phase as _phase
from .engines import solstice as _solstice
from .engines import subsolar as _subsolar
from .engines.frame import FrameDriver, FrameResult
from .ephemeris import EphemerisProvider, get_provider

_provider: Optional[EphemerisProvider] = None


def set_provider(provider: Optional[EphemerisProvider]) -> None:
    global _provider
    _provider = provider


def _prov() -> EphemerisProvider:
    global _provider
    if _provider is None:
        _provider = get_provider()
    return _provider


def _now() -> datetime:
    return datetime.now(timezone.utc)


def calendar_date(when: Union[date, datetime, None] = None) -> CalendarDate:
    """
    Custom calendar date. A plain date is read at its display anchor
    (20:00 UTC); a datetime is used as is.
    """
    table = _calendar.default_table()
    if when is None:
        when = _now()
    if isinstance(when, datetime):
        return _calendar.convert(table, when)
    return _calendar.convert_date(table, when)


def zenith(instant: Optional[datetime] = None) -> SubsolarPoint:
    instant = as_utc(instant) if instant is not None else _now()
    sun = _prov().sun(datetime_utc_to_jd(instant))
    return _subsolar.zenith(sun.ra_hours, sun.dec_deg, instant)


def moon_phase(instant: Optional[datetime] = None, *, state: Optional[PhaseState] = None) -> MoonPhase:
    """
    Phase at one instant. Without a state the trend is taken from a reading
    one hour earlier.
    """
    instant = as_utc(instant) if instant is not None else _now()
    jd = datetime_utc_to_jd(instant)
    if state is None:
        state = PhaseState.primed(_prov().moon(jd - 1.0 / 24.0).sun_elongation_deg)
    return _phase.classify(state, _prov().moon(jd).sun_elongation_deg, instant)


def next_winter_solstice(after: Optional[datetime] = None) -> datetime:
    after = as_utc(after) if after is not None else _now()
    return jd_to_datetime_utc(_solstice.next_winter_solstice(datetime_utc_to_jd(after)))


def make_driver(*, state: Optional[EngineState] = None) -> FrameDriver:
    return FrameDriver(provider=_prov(), state=state if state is not None else EngineState())


def celestial_state(instant: Optional[datetime] = None) -> FrameResult:
    """One frame with fresh engine state."""
    return make_driver().step(instant if instant is not None else _now())
