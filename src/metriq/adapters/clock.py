"""Clock adapters."""

from datetime import datetime, timedelta, timezone

from metriq.interfaces.clock import Clock

# pylint: disable=too-few-public-methods


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """A clock that only moves when told to.

    Note:
        Intended for tests and demos.
    """

    def __init__(self, start: datetime) -> None:
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward by ``delta``."""
        self._now = self._now + delta
