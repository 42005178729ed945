"""starscalendars public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

__version__ = "0.3.0"

from .api import (  # noqa: E402
    calendar_date,
    celestial_state,
    make_driver,
    moon_phase,
    next_winter_solstice,
    set_provider,
    zenith,
)
from .core.engine import EngineState  # noqa: E402
from .core.errors import (  # noqa: E402
    CalendarRangeError,
    EphemerisUnavailableError,
    ErrorKind,
    ExchangeError,
    StarsCalendarsError,
)
from .core.types import Body, CelestialState  # noqa: E402

__all__ = [
    "__version__",
    "calendar_date",
    "celestial_state",
    "make_driver",
    "moon_phase",
    "next_winter_solstice",
    "set_provider",
    "zenith",
    "EngineState",
    "CalendarRangeError",
    "EphemerisUnavailableError",
    "ErrorKind",
    "ExchangeError",
    "StarsCalendarsError",
    "Body",
    "CelestialState",
]
