"""Application 1: receives its packets from the router and reports them."""

import logging
import threading

from . import config
from .ccsds import Packet, PacketError, format_packet
from .osal import Semaphore, start_thread
from .packet_queue import PacketQueue, QueueFullError
from .router import Router

_log = logging.getLogger(__name__)


class App1:
    """Application subscribed to ``APP1_APID`` on the software bus."""

    def __init__(self, router: Router, start: Semaphore, end: Semaphore):
        self.semaphore_start = start
        self.semaphore_end = end
        self.sent_count = 0
        self.received_count = 0
        self.rejected_count = 0
        self.packet_queue = PacketQueue(config.APP1_QUEUE_NB)
        self._running = threading.Event()
        self._thread: threading.Thread | None = None
        router.subscribe(config.APP1_APID, self.handle)

    def handle(self, data: bytes) -> None:
        """Queue a packet delivered by the router; a packet that does not fit is counted."""
        try:
            self.packet_queue.add(data)
        except QueueFullError:
            _log.warning("application 1 packet rejected")
            self.rejected_count += 1
        else:
            self.received_count += 1

    def execute(self) -> list[Packet]:
        """Process every queued packet and return the ones that parsed."""
        packets = []
        for raw in self.packet_queue:
            try:
                packet = Packet.decode(raw)
            except PacketError as error:
                _log.warning("application 1 dropped malformed packet: %s", error)
                continue
            _log.info("application 1 received packet:\n%s", format_packet(packet))
            packets.append(packet)
        return packets

    def start(self) -> None:
        """Start the execution thread, driven by the start semaphore."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._running.set()
        self._thread = start_thread(self._run, "app1-execute")

    def stop(self) -> None:
        """Stop the execution thread after its current cycle."""
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