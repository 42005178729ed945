"""
starscalendars.engines.calendar
-------------------------------
The linear custom calendar. A table of day boundaries is built once from a
fixed origin and cadence; any instant inside the horizon maps to the entry
with the greatest start epoch not after it.
"""

from __future__ import annotations

import functools
from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import List, Tuple

from starscalendars import config
from starscalendars.core.errors import CalendarRangeError
from starscalendars.core.time import epoch_ms
from starscalendars.core.types import CalendarDate, CalendarEntry


@dataclass(frozen=True)
class CalendarTable:
    """Immutable, strictly increasing table of calendar day starts."""
    entries: Tuple[CalendarEntry, ...]
    horizon_ms: float

    _keys: Tuple[float, ...] = field(default=(), repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self._keys:
            object.__setattr__(self, "_keys", tuple(e.epoch_ms for e in self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def first(self) -> CalendarEntry:
        return self.entries[0]

    @property
    def last(self) -> CalendarEntry:
        return self.entries[-1]

    @classmethod
    def build(
        cls,
        *,
        origin_ms: float = config.CALENDAR_ORIGIN_MS,
        horizon_ms: float = config.CALENDAR_HORIZON_MS,
        day_ms: float = config.CALENDAR_DAY_MS,
        half_day_ms: float = config.CALENDAR_HALF_DAY_MS,
        days_per_year: int = config.CALENDAR_DAYS_PER_YEAR,
        splice: Tuple[int, int] = config.CALENDAR_SPLICE,
    ) -> "CalendarTable":
        """
        Walk from the origin to the horizon by repeated addition.

        At the splice point (year, day) the following two days are half length.
        The day index wraps at days_per_year and the year index advances.
        """
        entries: List[CalendarEntry] = []
        u, d, y = origin_ms, 0, 0
        while u < horizon_ms:
            entries.append(CalendarEntry(epoch_ms=u, day_index=d, year_index=y))
            if (y, d) == splice:
                u += half_day_ms
                d += 1
                entries.append(CalendarEntry(epoch_ms=u, day_index=d, year_index=y))
                u += half_day_ms
                d += 1
            else:
                u += day_ms
                d += 1
            if d == days_per_year:
                d = 0
                y += 1
        return cls(entries=tuple(entries), horizon_ms=horizon_ms)

    def lookup(self, ms: float) -> CalendarEntry:
        """Floor lookup. Raises CalendarRangeError outside [first, horizon)."""
        if ms < self._keys[0] or ms >= self.horizon_ms:
            raise CalendarRangeError(
                f"instant {ms:.0f} ms outside calendar range "
                f"[{self._keys[0]:.0f}, {self.horizon_ms:.0f})"
            )
        i = bisect_right(self._keys, ms)
        return self.entries[i - 1]


@functools.lru_cache(maxsize=1)
def default_table() -> CalendarTable:
    """The session table with the standard origin and cadence. Built once."""
    return CalendarTable.build()


def format_display(day_index: int, year_index: int) -> str:
    """DD.dd.YY: day in decad, decad, last two digits of the year."""
    decad, day_in_decad = divmod(day_index, 10)
    return f"{day_in_decad:02d}.{decad:02d}.{year_index % 100:02d}"


def entry_to_date(entry: CalendarEntry) -> CalendarDate:
    decad, day_in_decad = divmod(entry.day_index, 10)
    return CalendarDate(
        year=entry.year_index,
        decad=decad,
        day_in_decad=day_in_decad,
        day_index=entry.day_index,
        display=format_display(entry.day_index, entry.year_index),
    )


def convert(table: CalendarTable, instant: datetime) -> CalendarDate:
    """Map an aware instant to its custom calendar date."""
    return entry_to_date(table.lookup(epoch_ms(instant)))


def anchor_instant(d: date) -> datetime:
    """
    The instant used to read off a civil date: midnight of the next day at
    UTC+4, i.e. 20:00 UTC on d.
    """
    return datetime.combine(d, time(config.CALENDAR_ANCHOR_UTC_HOUR), tzinfo=timezone.utc)


def convert_date(table: CalendarTable, d: date) -> CalendarDate:
    return convert(table, anchor_instant(d))
