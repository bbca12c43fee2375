"""UDP data link carrying packets between the ground and the server."""

import logging
import socket
import threading

from . import config
from .osal import sleep_ms, start_thread
from .packet_queue import PacketQueue, QueueFullError

_log = logging.getLogger(__name__)


class DataLink:
    """UDP endpoint that sends packets and queues the packets it receives.

    Received datagrams are placed in ``receive_queue`` by a background
    thread started with ``start``; ``drain`` takes them out oldest first.
    """

    def __init__(
        self,
        address: str = config.DATALINK_ADDRESS,
        port: int = config.DATALINK_PORT,
        queue_capacity: int = config.DATALINK_RECEIVE_QUEUE_NB,
    ):
        self.address = address
        self.port = port
        self.receive_queue = PacketQueue(queue_capacity)
        self.received_count = 0
        self.sent_count = 0
        self.rejected_count = 0
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._socket.settimeout(config.DATALINK_POLL_MS / 1000)
        self._running = threading.Event()
        self._thread: threading.Thread | None = None
        self._closed = False

    @property
    def local_address(self) -> tuple[str, int]:
        """The (host, port) the socket is bound to."""
        return self._socket.getsockname()

    def bind(self) -> None:
        """Bind the socket to the configured address so it acts as a server."""
        self._socket.bind((self.address, self.port))

    def start(self) -> None:
        """Start the background receive thread, if it is not running yet."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._running.set()
        self._thread = start_thread(self._receive_loop, "datalink-receive")

    def send(self, data: bytes) -> int:
        """Send ``data`` to the configured address and return the bytes sent."""
        sent = self._socket.sendto(bytes(data), (self.address, self.port))
        if sent > 0:
            self.sent_count += 1
        else:
            _log.error("data link sent no data")
        return sent

    def drain(self) -> list[bytes]:
        """Remove and return every received packet, oldest first."""
        return list(self.receive_queue)

    def close(self) -> None:
        """Stop the receive thread and close the socket."""
        self._running.clear()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        if not self._closed:
            self._socket.close()
            self._closed = True

    def __enter__(self) -> "DataLink":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _receive_loop(self) -> None:
        while self._running.is_set():
            try:
                data, _ = self._socket.recvfrom(config.SBRO_PACKET_MAX_NB)
            except socket.timeout:
                continue
            except OSError:
                if not self._running.is_set():
                    break
                sleep_ms(config.DATALINK_POLL_MS)
                continue
            if not data:
                continue
            _log.debug("data link received packet of %d bytes", len(data))
            try:
                self.receive_queue.add(data)
            except QueueFullError:
                _log.warning("data link packet rejected")
                self.rejected_count += 1
            else:
                self.received_count += 1