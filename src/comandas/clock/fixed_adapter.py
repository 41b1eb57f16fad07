"""Settable clock for development and testing.

Time only moves when told to, so day-boundary behavior (daily number reuse,
the "today" listing) can be exercised deterministically.
"""

from datetime import datetime, timedelta

from comandas.clock.port import Clock


class FixedClock(Clock):
    """Clock frozen at a configurable instant."""

    def __init__(self, moment: datetime | None = None) -> None:
        self.moment: datetime = moment or datetime(2024, 1, 15, 12, 0, 0)

    def now(self) -> datetime:
        return self.moment

    def set(self, moment: datetime) -> None:
        """Jump to an absolute instant."""
        self.moment = moment

    def advance(self, **kwargs) -> None:
        """Move forward by a ``timedelta(**kwargs)``."""
        self.moment = self.moment + timedelta(**kwargs)
