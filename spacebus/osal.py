"""Operating-system abstraction: threads, semaphores and sleeping."""

import threading
import time
from collections.abc import Callable
from typing import Any

from . import config

TASK_MAX_DELAY = config.UINT32_MAX
"""Timeout value meaning "wait forever"."""


class Semaphore:
    """Counting semaphore with millisecond timeouts."""

    def __init__(self, initial: int = 1):
        if initial < 0:
            raise ValueError("initial semaphore value must not be negative")
        self._semaphore = threading.Semaphore(initial)

    def post(self) -> None:
        """Release the semaphore once."""
        self._semaphore.release()

    def wait(self, timeout_ms: int | None = None) -> bool:
        """Acquire the semaphore.

        ``None`` or ``TASK_MAX_DELAY`` blocks until it is available, 0 only
        tries once. Returns False if the timeout ran out first.
        """
        if timeout_ms is None or timeout_ms >= TASK_MAX_DELAY:
            return self._semaphore.acquire()
        if timeout_ms <= 0:
            return self._semaphore.acquire(blocking=False)
        return self._semaphore.acquire(timeout=timeout_ms / 1000)


def start_thread(target: Callable[..., Any], name: str, *args: Any) -> threading.Thread:
    """Start ``target(*args)`` on a new daemon thread and return it."""
    thread = threading.Thread(target=target, name=name, args=args, daemon=True)
    thread.start()
    return thread


def sleep_ms(milliseconds: float) -> None:
    """Suspend the calling thread for ``milliseconds``."""
    if milliseconds > 0:
        time.sleep(milliseconds / 1000)