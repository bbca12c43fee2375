"""Scheduler running the software bus and the applications in fixed time slots."""

import logging
import threading
from dataclasses import dataclass

from . import config
from .app1 import App1
from .datalink import DataLink
from .osal import Semaphore, sleep_ms, start_thread
from .router import Router

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Slot:
    name: str
    wait_before_ms: int
    length_ms: int
    start: Semaphore
    end: Semaphore


class Maestro:
    """Owns the router and application 1 and releases each in its slot.

    Every period the maestro thread wakes the execute thread, which runs one
    ``execute`` cycle. A slot whose process has not signalled its end when
    the slot is over counts as an overrun; after
    ``CONSECUTIVE_OVERRUNS_LIMIT`` consecutive overruns of one slot the
    maestro stops running.
    """

    def __init__(
        self,
        data_link: DataLink | None = None,
        period_ms: int = config.MAESTRO_PERIOD_MS,
    ):
        if period_ms <= 0:
            raise ValueError("period_ms must be positive")
        self.period_ms = period_ms
        self.up_time = 0
        self.is_running = True

        swbus_start, swbus_end, process1_start, process1_end = (
            Semaphore(0) for _ in range(4)
        )
        self.router = Router(swbus_start, swbus_end, data_link)
        self.app1 = App1(self.router, process1_start, process1_end)

        self._slots = (
            _Slot(
                "swbus",
                config.SWBUS_WAIT_BEFORE_MS,
                config.SWBUS_TIME_LENGTH_MS,
                swbus_start,
                swbus_end,
            ),
            _Slot(
                "process1",
                config.PROCESS1_WAIT_BEFORE_MS,
                config.PROCESS1_TIME_LENGTH_MS,
                process1_start,
                process1_end,
            ),
        )
        self.overruns = {slot.name: 0 for slot in self._slots}
        self.consecutive_overruns = {slot.name: 0 for slot in self._slots}

        self._execute_semaphore = Semaphore(0)
        self._stopping = threading.Event()
        self._threads: list[threading.Thread] = []

    def start(self) -> None:
        """Start the router, the application and the scheduling threads."""
        if any(thread.is_alive() for thread in self._threads):
            return
        self._stopping.clear()
        self.router.start()
        self.app1.start()
        self._threads = [
            start_thread(self._tick, "maestro"),
            start_thread(self._run_schedule, "maestro-execute"),
        ]

    def execute(self) -> dict[str, bool]:
        """Run one scheduling cycle.

        Returns, for each slot, whether its process finished in time.
        """
        completed = {}
        time_waited = 0
        for slot in self._slots:
            sleep_ms(slot.wait_before_ms - time_waited)
            time_waited += slot.wait_before_ms

            slot.end.wait(0)  # discard a late end signal from the last cycle
            slot.start.post()

            sleep_ms(slot.length_ms)
            time_waited += slot.length_ms
            finished = slot.end.wait(0)
            completed[slot.name] = finished

            if finished:
                self.consecutive_overruns[slot.name] = 0
                continue
            _log.warning("slot %s overran", slot.name)
            self.overruns[slot.name] += 1
            self.consecutive_overruns[slot.name] += 1
            if self.consecutive_overruns[slot.name] == config.CONSECUTIVE_OVERRUNS_LIMIT:
                _log.error("slot %s overran too often: reboot", slot.name)
                self.is_running = False
        return completed

    def stop(self) -> None:
        """Stop scheduling and the threads of the router and the application."""
        self.is_running = False
        self._stopping.set()
        self._execute_semaphore.post()
        for thread in self._threads:
            thread.join()
        self._threads = []
        self.router.stop()
        self.app1.stop()

    def _active(self) -> bool:
        return self.is_running and not self._stopping.is_set()

    def _tick(self) -> None:
        while self._active():
            _log.debug("maestro up time %d", self.up_time)
            self._execute_semaphore.post()
            if self._stopping.wait(self.period_ms / 1000):
                break
            self.up_time += 1
        # wake the execute thread so it notices the end
        self._execute_semaphore.post()

    def _run_schedule(self) -> None:
        while self._active():
            self._execute_semaphore.wait()
            if not self._active():
                break
            self.execute()