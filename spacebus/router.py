"""Software bus routing packets to subscribers by application process id."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from . import config
from .ccsds import PacketError, PrimaryHeader
from .datalink import DataLink
from .osal import Semaphore, start_thread
from .packet_queue import PacketQueue, QueueFullError

_log = logging.getLogger(__name__)

Handler = Callable[[bytes], None]


@dataclass(frozen=True)
class _Subscriber:
    apid: int
    handler: Handler


class Router:
    """Queue published packets and hand each to the subscriber of its apid.

    When a data link is given, the packets it has received are published
    at the start of every ``execute``. The router does not bind or close
    the data link; ``start`` only starts its receive thread.
    """

    def __init__(
        self,
        start: Semaphore,
        end: Semaphore,
        data_link: DataLink | None = None,
    ):
        self.semaphore_start = start
        self.semaphore_end = end
        self.data_link = data_link
        self.packet_queue = PacketQueue(config.SBRO_QUEUE_NB)
        self.rejected_count = 0
        self.subscriber_not_found_count = 0
        self.malformed_count = 0
        self._subscribers: list[_Subscriber] = []
        self._running = threading.Event()
        self._thread: threading.Thread | None = None

    def publish(self, data: bytes) -> None:
        """Queue a packet for routing; a packet that does not fit is counted."""
        try:
            self.packet_queue.add(data)
        except QueueFullError:
            _log.warning("router packet rejected")
            self.rejected_count += 1

    def subscribe(self, apid: int, handler: Handler) -> None:
        """Register ``handler`` for packets addressed to ``apid``."""
        if len(self._subscribers) >= config.SBRO_SUBSCRIBERS_MAX_NO:
            raise ValueError(
                f"router already has {config.SBRO_SUBSCRIBERS_MAX_NO} subscribers"
            )
        self._subscribers.append(_Subscriber(apid, handler))

    def execute(self) -> None:
        """Publish data link packets, then route every queued packet."""
        if self.data_link is not None:
            for packet in self.data_link.drain():
                self.publish(packet)

        for packet in self.packet_queue:
            try:
                apid = PrimaryHeader.decode(packet).apid
            except PacketError as error:
                _log.warning("router dropped malformed packet: %s", error)
                self.malformed_count += 1
                continue
            _log.debug("received packet for apid: %d", apid)
            subscriber = next((s for s in self._subscribers if s.apid == apid), None)
            if subscriber is None:
                _log.warning("router subscriber not found for apid %d", apid)
                self.subscriber_not_found_count += 1
            else:
                subscriber.handler(packet)

    def start(self) -> None:
        """Start the routing thread and the data link's receive thread."""
        if self.data_link is not None:
            self.data_link.start()
        if self._thread is not None and self._thread.is_alive():
            return
        self._running.set()
        self._thread = start_thread(self._run, "router-execute")

    def stop(self) -> None:
        """Stop the routing thread after its current cycle."""
        self._running.clear()
        if self._thread is not None:
            self.semaphore_start.post()
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while self._running.is_set():
            self.semaphore_start.wait()
            if not self._running.is_set():
                break
            self.execute()
            self.semaphore_end.post()