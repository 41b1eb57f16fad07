"""Serialized command dispatch for comandas.

Two requests touching the same comanda must not interleave: each one loads
the aggregate, changes its items, recalculates and commits, and a second
writer working from the same snapshot would overwrite the first one's items
and total. ``dispatch`` holds a per-comanda lock across the whole unit of
work, commit included. Requests for different comandas never share a lock.

Opening is keyed on ``(business day, number)`` instead, which closes the gap
between "is this number free today?" and the insert. The ``daily_key``
uniqueness constraint on the aggregate backs this up at the storage level.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from comandas.clock import get_clock
from comandas.comanda.daily import business_date, daily_key
from comandas.comanda.opening import OpenComanda
from comandas.comanda.queries import comandas_numbered_on, get_comanda
from comandas.errors import NumberAlreadyExistsTodayError
from comandas.utils.logging import log_context

logger = structlog.get_logger(__name__)


@dataclass
class _Slot:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class KeyedLock:
    """One mutex per key, created on first use and dropped once idle."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._slots: dict[str, _Slot] = {}

    @contextmanager
    def hold(self, key: str):
        with self._guard:
            slot = self._slots.setdefault(key, _Slot())
            slot.holders += 1

        slot.lock.acquire()
        try:
            yield
        finally:
            slot.lock.release()
            with self._guard:
                slot.holders -= 1
                if slot.holders == 0:
                    del self._slots[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._slots)


_locks = KeyedLock()


def lock_key(command) -> str:
    if isinstance(command, OpenComanda):
        return f"number:{daily_key(command.number, get_clock().now())}"
    return f"comanda:{command.comanda_id}"


def _number_taken_today(command, exc: ValidationError) -> bool:
    """A ``daily_key`` rejection is a duplicate only if the number is already in use today."""
    if not isinstance(command, OpenComanda) or "daily_key" not in (exc.messages or {}):
        return False
    return bool(comandas_numbered_on(command.number, get_clock().now()))


def dispatch(command):
    """Process a comanda command and return the committed ``Comanda``."""
    key = lock_key(command)
    with _locks.hold(key), log_context(command=type(command).__name__, lock=key):
        try:
            comanda_id = current_domain.process(command, asynchronous=False)
        except ValidationError as exc:
            if _number_taken_today(command, exc):
                logger.warning("Duplicate daily number rejected by storage", number=command.number)
                raise NumberAlreadyExistsTodayError(command.number, business_date(get_clock().now())) from exc
            raise
        return get_comanda(comanda_id)
