"""Clock port (abstract interface).

The comanda lifecycle reads "now" for creation and close timestamps and to
derive the bounds of the current calendar day. Going through this port lets
tests pin the time without patching ``datetime``.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Abstract source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current local time (naive)."""
        ...
