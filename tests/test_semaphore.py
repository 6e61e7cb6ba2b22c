import threading

import pytest

from nacoskit.semaphore import Semaphore


def test_try_acquire_until_exhausted():
    sem = Semaphore(2)
    assert sem.available_permits() == 2
    assert sem.try_acquire() is True
    assert sem.try_acquire() is True
    assert sem.try_acquire() is False
    assert sem.available_permits() == 0


def test_release_restores_permit():
    sem = Semaphore(1)
    sem.acquire()
    assert sem.available_permits() == 0
    sem.release()
    assert sem.available_permits() == 1
    assert sem.try_acquire() is True


def test_zero_capacity_never_grants():
    sem = Semaphore(0)
    assert sem.try_acquire() is False
    assert sem.available_permits() == 0


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        Semaphore(-1)


def test_context_manager_holds_permit():
    sem = Semaphore(3)
    with sem:
        assert sem.available_permits() == 2
    assert sem.available_permits() == 3


def test_acquire_waits_for_release():
    sem = Semaphore(1)
    sem.acquire()
    acquired = threading.Event()

    def worker():
        sem.acquire()
        acquired.set()

    thread = threading.Thread(target=worker, daemon=True)
    thread.start()
    assert acquired.wait(0.1) is False
    sem.release()
    assert acquired.wait(2.0) is True
    thread.join(2.0)
    assert sem.available_permits() == 0