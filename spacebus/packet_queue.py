"""Bounded FIFO queue of variable-size byte packets."""

import threading
from collections import deque
from collections.abc import Iterator

from . import config


class QueueFullError(Exception):
    """Raised when a packet does not fit in the queue."""


class PacketQueue:
    """FIFO queue bounded both by total bytes and by element count."""

    def __init__(self, capacity: int, max_elements: int = config.QUEUE_ELEMENT_MAX_NO):
        if capacity < 0 or max_elements < 0:
            raise ValueError("capacity and max_elements must not be negative")
        self.capacity = capacity
        self.max_elements = max_elements
        self._items: deque[bytes] = deque()
        self._size = 0
        self._lock = threading.Lock()

    @property
    def nbytes(self) -> int:
        """Total number of bytes currently queued."""
        return self._size

    def add(self, element: bytes) -> None:
        """Append a packet; raise QueueFullError if it does not fit."""
        packet = bytes(element)
        with self._lock:
            if len(self._items) >= self.max_elements:
                raise QueueFullError(
                    f"queue holds the maximum of {self.max_elements} elements"
                )
            if self._size + len(packet) > self.capacity:
                raise QueueFullError(
                    f"{len(packet)} bytes do not fit: "
                    f"{self._size} of {self.capacity} bytes used"
                )
            self._items.append(packet)
            self._size += len(packet)

    def get(self) -> bytes | None:
        """Remove and return the oldest packet, or None if the queue is empty."""
        with self._lock:
            if not self._items:
                return None
            packet = self._items.popleft()
            self._size -= len(packet)
            return packet

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[bytes]:
        """Drain the queue, yielding packets oldest first."""
        while (packet := self.get()) is not None:
            yield packet