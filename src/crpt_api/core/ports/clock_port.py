from __future__ import annotations

from threading import Event
from typing import Protocol
import time


class ClockPort(Protocol):
    def monotonic(self) -> float:
        """Return a monotonic timestamp in seconds."""
        ...

    def wait(self, event: Event, seconds: float) -> bool:
        """Wait up to `seconds` for `event`; return True if it was set."""
        ...


class SystemClock:
    def monotonic(self) -> float:
        return time.monotonic()

    def wait(self, event: Event, seconds: float) -> bool:
        return event.wait(timeout=max(0.0, seconds))
