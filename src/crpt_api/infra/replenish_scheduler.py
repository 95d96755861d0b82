from __future__ import annotations

import logging
from threading import Event, Lock, Thread, current_thread
from typing import Callable, Optional

from ..core.domain.enums import SchedulerState
from ..core.ports.clock_port import ClockPort, SystemClock

logger = logging.getLogger(__name__)


class ReplenishScheduler:
    """Runs an action at a fixed rate on a dedicated background thread.

    Tick ``k`` is due at ``start + initial_delay + k * period``. Deadlines are
    measured from the start point, not from the end of the previous tick, so a
    slow action does not shift later ticks. A late tick fires immediately. Ticks
    never overlap because a single worker runs them.

    Lifecycle: CREATED -> RUNNING -> STOPPED. A stopped scheduler cannot be
    restarted.
    """

    def __init__(
        self,
        action: Callable[[], None],
        period_seconds: float,
        *,
        initial_delay_seconds: Optional[float] = None,
        clock: ClockPort | None = None,
        name: str = "crpt-api-replenish",
    ) -> None:
        if period_seconds <= 0:
            raise ValueError(f"period must be positive, got {period_seconds}")
        if initial_delay_seconds is None:
            initial_delay_seconds = period_seconds
        if initial_delay_seconds < 0:
            raise ValueError(f"initial delay must not be negative, got {initial_delay_seconds}")
        self._action = action
        self._period = period_seconds
        self._initial_delay = initial_delay_seconds
        self._clock = clock or SystemClock()
        self._name = name
        self._state = SchedulerState.CREATED
        self._state_lock = Lock()
        self._stop_event = Event()
        self._thread: Thread | None = None
        self._tick_count = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def start(self) -> None:
        with self._state_lock:
            if self._state is not SchedulerState.CREATED:
                raise RuntimeError(f"Cannot start scheduler in state {self._state.name}")
            self._thread = Thread(target=self._run, name=self._name, daemon=True)
            self._state = SchedulerState.RUNNING
            self._thread.start()
        logger.info(f"Replenish scheduler started: period={self._period}s, initial_delay={self._initial_delay}s")

    def stop(self, *, wait: bool = True) -> None:
        """Stop ticking. Safe to call more than once."""
        with self._state_lock:
            if self._state is SchedulerState.STOPPED:
                return
            self._state = SchedulerState.STOPPED
            self._stop_event.set()
            thread = self._thread
        if wait and thread is not None and thread is not current_thread():
            thread.join()
        logger.info(f"Replenish scheduler stopped after {self._tick_count} ticks")

    def _run(self) -> None:
        next_tick = self._clock.monotonic() + self._initial_delay
        while not self._clock.wait(self._stop_event, next_tick - self._clock.monotonic()):
            try:
                self._action()
            except Exception:
                logger.exception("Replenish action failed; keeping schedule")
            self._tick_count += 1
            next_tick += self._period
