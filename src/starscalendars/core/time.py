from __future__ import annotations

from datetime import datetime, timedelta, timezone

_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC
_MS_PER_DAY = 86400000.0
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Normalize an aware datetime to UTC. Naive datetimes are rejected."""
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    return dt.astimezone(timezone.utc)


def epoch_ms(dt: datetime) -> float:
    """Milliseconds since the Unix epoch, exact to the microsecond."""
    delta = as_utc(dt) - _UNIX_EPOCH
    return (delta.days * 86400 + delta.seconds) * 1000.0 + delta.microseconds / 1000.0


def from_epoch_ms(ms: float) -> datetime:
    return _UNIX_EPOCH + timedelta(milliseconds=ms)


def ms_to_jd(ms: float) -> float:
    return _JD_UNIX_EPOCH + ms / _MS_PER_DAY


def datetime_utc_to_jd(dt: datetime) -> float:
    """datetime -> JD (UTC) via the Unix epoch. Requires an aware datetime."""
    return ms_to_jd(epoch_ms(dt))


def jd_to_datetime_utc(jd: float) -> datetime:
    """JD (UTC) -> timezone-aware datetime in UTC."""
    return from_epoch_ms((jd - _JD_UNIX_EPOCH) * _MS_PER_DAY)
