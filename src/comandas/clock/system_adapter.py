"""Wall clock adapter, reads the host's local time."""

from datetime import datetime

from comandas.clock.port import Clock


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now()
