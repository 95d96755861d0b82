from __future__ import annotations

from typing import Protocol


class PermitGatePort(Protocol):
    def acquire(self, timeout: float | None = None) -> bool:
        """Block until a permit is available and take it.

        With a timeout, return False if no permit became available in time.
        """
        ...

    def release(self) -> None:
        """Return one permit, never exceeding the pool capacity."""

    def replenish_to_full(self) -> None:
        """Reset the available permits to the pool capacity."""
