import threading
import time

import pytest

from spacebus.osal import TASK_MAX_DELAY, Semaphore, sleep_ms, start_thread


def test_semaphore_starts_available_by_default():
    sem = Semaphore()
    assert sem.wait(0) is True
    assert sem.wait(0) is False


def test_semaphore_with_zero_initial_is_taken():
    sem = Semaphore(0)
    assert sem.wait(0) is False


def test_post_makes_semaphore_available():
    sem = Semaphore(0)
    sem.post()
    assert sem.wait(0) is True
    assert sem.wait(0) is False


def test_posts_accumulate():
    sem = Semaphore(0)
    sem.post()
    sem.post()
    assert [sem.wait(0), sem.wait(0), sem.wait(0)] == [True, True, False]


def test_wait_times_out():
    sem = Semaphore(0)
    started = time.monotonic()
    assert sem.wait(50) is False
    assert time.monotonic() - started >= 0.04


def test_negative_initial_rejected():
    with pytest.raises(ValueError):
        Semaphore(-1)


def test_max_delay_waits_until_posted():
    sem = Semaphore(0)
    start_thread(lambda: (sleep_ms(20), sem.post()), "poster")
    assert sem.wait(TASK_MAX_DELAY) is True


def test_none_timeout_waits_until_posted():
    sem = Semaphore(0)
    start_thread(sem.post, "poster")
    assert sem.wait(None) is True


def test_start_thread_runs_target_with_args():
    results = []
    done = threading.Event()

    def work(a, b):
        results.append(a + b)
        done.set()

    thread = start_thread(work, "worker", 2, 3)
    assert done.wait(2)
    thread.join(2)
    assert results == [5]
    assert thread.name == "worker"
    assert thread.daemon is True


def test_sleep_ms_sleeps_at_least_requested():
    sem = Semaphore(0)
    start_thread(lambda: (sleep_ms(200), sem.post()), "sleeper")
    assert sem.wait(20) is False
    assert sem.wait(2000) is True


def test_sleep_ms_zero_returns_quickly():
    sem = Semaphore(0)
    start_thread(lambda: (sleep_ms(0), sem.post()), "sleeper")
    assert sem.wait(500) is True