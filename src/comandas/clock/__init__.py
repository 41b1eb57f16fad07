"""Process-wide clock.

Everything that needs "now" (opening, closing, the daily number rule, the
today listing) calls ``get_clock().now()``. ``SystemClock`` is used unless a
test or a demo installs another one with ``set_clock()``.
"""

from comandas.clock.fixed_adapter import FixedClock
from comandas.clock.port import Clock
from comandas.clock.system_adapter import SystemClock

_current_clock: Clock | None = None


def get_clock() -> Clock:
    global _current_clock
    if _current_clock is None:
        _current_clock = SystemClock()
    return _current_clock


def set_clock(clock: Clock) -> None:
    global _current_clock
    _current_clock = clock


def reset_clock() -> None:
    """Drop any installed clock; the next ``get_clock()`` returns a ``SystemClock``."""
    global _current_clock
    _current_clock = None


__all__ = ["Clock", "FixedClock", "SystemClock", "get_clock", "reset_clock", "set_clock"]
