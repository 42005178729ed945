from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .types import ExtremaTracker, PhaseState

if TYPE_CHECKING:
    from starscalendars.engines.calendar import CalendarTable


@dataclass
class EngineState:
    """
    Per-session mutable context: calendar table, extrema trackers and phase
    memory. Passed explicitly to every stateful operation and owned by the
    frame driver. Not thread-safe.
    """
    earth_tracker: ExtremaTracker = field(default_factory=ExtremaTracker)
    moon_tracker: ExtremaTracker = field(default_factory=ExtremaTracker)
    phase: Optional[PhaseState] = None
    _calendar: Optional["CalendarTable"] = field(default=None, repr=False)

    @property
    def calendar(self) -> "CalendarTable":
        """Calendar table, built on first access."""
        if self._calendar is None:
            from starscalendars.engines.calendar import default_table
            self._calendar = default_table()
        return self._calendar

    def reset(self) -> None:
        """Forget trackers and phase memory. The calendar table is kept."""
        self.earth_tracker = ExtremaTracker()
        self.moon_tracker = ExtremaTracker()
        self.phase = None
