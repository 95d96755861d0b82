from __future__ import annotations

import random
import threading
import time

import pytest

from crpt_api.infra.permit_pool import PermitPool


@pytest.mark.parametrize("limit", [0, -1, -100])
def test_non_positive_limit_rejected(limit):
    with pytest.raises(ValueError):
        PermitPool(limit)


@pytest.mark.parametrize("limit", [1.5, "3", True, None])
def test_non_integer_limit_rejected(limit):
    with pytest.raises(ValueError):
        PermitPool(limit)  # type: ignore[arg-type]


def test_new_pool_is_full():
    pool = PermitPool(3)
    assert pool.limit == 3
    assert pool.available == 3


def test_acquire_decrements_and_release_restores():
    pool = PermitPool(2)
    assert pool.acquire() is True
    assert pool.available == 1
    assert pool.acquire() is True
    assert pool.available == 0
    pool.release()
    assert pool.available == 1


def test_release_never_exceeds_limit():
    pool = PermitPool(2)
    pool.release()
    pool.release()
    assert pool.available == 2


def test_acquire_with_timeout_returns_false_when_exhausted():
    pool = PermitPool(1)
    assert pool.acquire()
    start = time.monotonic()
    assert pool.acquire(timeout=0.1) is False
    assert time.monotonic() - start >= 0.09
    assert pool.available == 0


def test_replenish_resets_to_limit_from_any_level():
    pool = PermitPool(3)
    pool.replenish_to_full()
    assert pool.available == 3
    pool.acquire()
    pool.acquire()
    pool.replenish_to_full()
    assert pool.available == 3
    for _ in range(3):
        pool.acquire()
    pool.replenish_to_full()
    assert pool.available == 3


def test_release_after_replenish_is_capped():
    """A call that started before a tick releases into an already full pool."""
    pool = PermitPool(2)
    pool.acquire()
    pool.replenish_to_full()
    pool.release()
    assert pool.available == 2


def _blocked_acquirer(pool: PermitPool) -> tuple[threading.Thread, threading.Event]:
    acquired = threading.Event()

    def worker():
        pool.acquire()
        acquired.set()

    t = threading.Thread(target=worker, daemon=True)
    t.start()
    return t, acquired


def test_blocked_acquire_wakes_on_release():
    pool = PermitPool(1)
    pool.acquire()
    t, acquired = _blocked_acquirer(pool)
    assert not acquired.wait(0.2)
    pool.release()
    assert acquired.wait(1.0)
    t.join(1.0)
    assert pool.available == 0


def test_replenish_wakes_all_blocked_acquirers():
    pool = PermitPool(3)
    for _ in range(3):
        pool.acquire()
    waiters = [_blocked_acquirer(pool) for _ in range(3)]
    time.sleep(0.1)
    assert not any(ev.is_set() for _, ev in waiters)

    pool.replenish_to_full()

    for t, ev in waiters:
        assert ev.wait(1.0)
        t.join(1.0)
    assert pool.available == 0


def test_bounds_hold_under_concurrent_interleavings():
    pool = PermitPool(4)
    violations: list[int] = []
    stop = threading.Event()

    def observer():
        while not stop.is_set():
            v = pool.available
            if not 0 <= v <= pool.limit:
                violations.append(v)

    def user(seed: int):
        rnd = random.Random(seed)
        for _ in range(200):
            if pool.acquire(timeout=0.05):
                if rnd.random() < 0.1:
                    time.sleep(0.001)
                pool.release()

    def replenisher():
        while not stop.is_set():
            pool.replenish_to_full()
            time.sleep(0.001)

    background = [threading.Thread(target=observer), threading.Thread(target=replenisher)]
    users = [threading.Thread(target=user, args=(i,)) for i in range(8)]
    for t in background + users:
        t.start()
    for t in users:
        t.join()
    stop.set()
    for t in background:
        t.join()

    assert violations == []
    assert pool.available == pool.limit
