from __future__ import annotations

import logging
from threading import Condition, Lock

from ..core.ports.permit_port import PermitGatePort

logger = logging.getLogger(__name__)


class PermitPool(PermitGatePort):
    """Counting permit pool of fixed capacity.

    Callers take a permit with ``acquire()`` before a submission and give it back
    with ``release()`` afterwards. A scheduler calls ``replenish_to_full()`` once
    per window to reset the pool.

    Invariant: ``0 <= available <= limit`` at every observation point. All three
    mutations run under the same condition lock, so wake-ups are never lost.
    Waiters are not served in FIFO order.

    Example:
        pool = PermitPool(limit=3)
        if pool.acquire(timeout=1.0):
            try:
                ...
            finally:
                pool.release()
    """

    def __init__(self, limit: int) -> None:
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValueError(f"permit limit must be an integer, got {limit!r}")
        if limit <= 0:
            raise ValueError(f"permit limit must be positive, got {limit}")
        self._limit = limit
        self._available = limit
        self._cond = Condition(Lock())

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def available(self) -> int:
        with self._cond:
            return self._available

    def acquire(self, timeout: float | None = None) -> bool:
        """Take one permit, blocking while none is available.

        Args:
            timeout: Maximum seconds to wait. None waits indefinitely.

        Returns:
            True if a permit was taken, False if the timeout elapsed first.
        """
        with self._cond:
            if not self._cond.wait_for(lambda: self._available > 0, timeout=timeout):
                logger.debug(f"No permit within {timeout}s (limit={self._limit})")
                return False
            self._available -= 1
            logger.debug(f"Permit acquired ({self._available}/{self._limit} left)")
            return True

    def release(self) -> None:
        with self._cond:
            if self._available >= self._limit:
                # already refilled by a replenishment tick
                return
            self._available += 1
            self._cond.notify()

    def replenish_to_full(self) -> None:
        with self._cond:
            self._available = self._limit
            self._cond.notify_all()
        logger.debug(f"Permit pool replenished to {self._limit}")
