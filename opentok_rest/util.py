"""Time helpers."""

from datetime import datetime, timedelta
from pytz import UTC


def now() -> int:
    """Get the current epoch/unix time."""
    return epoch(datetime.now(tz=UTC))


def epoch(t: datetime) -> int:
    """Convert a :class:`.datetime` to UNIX time."""
    if t.tzinfo is None:
        t = UTC.localize(t)
    delta = t - datetime.fromtimestamp(0, tz=UTC)
    return int(delta.total_seconds())


def from_epoch(t: int) -> datetime:
    """Get a :class:`datetime` from an UNIX timestamp."""
    return datetime.fromtimestamp(t, tz=UTC)


def from_epoch_millis(t: int) -> datetime:
    """Get a :class:`datetime` from milliseconds since epoch."""
    seconds, millis = divmod(t, 1000)
    return from_epoch(seconds) + timedelta(milliseconds=millis)
