"""Multi-producer, single-consumer event channel.

Producers are the host (through ``Pager``) and the input reader thread; the
reactor is the only consumer. The consumer closes the channel when the session
ends so producers can tell a finished session from a slow one.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from queue import Empty, SimpleQueue

from .errors import ChannelDisconnected
from .events import Event


class EventChannel:
    """Ordered event queue with an explicit disconnected state.

    Per-producer send order is preserved; events from different producers
    interleave in arrival order.
    """

    def __init__(self) -> None:
        self._queue: SimpleQueue[Event] = SimpleQueue()
        self._closed = threading.Event()

    @property
    def is_closed(self) -> bool:
        return self._closed.is_set()

    def send(self, event: Event) -> None:
        """Enqueue ``event``; raises ``ChannelDisconnected`` after ``close``."""
        if self._closed.is_set():
            raise ChannelDisconnected("pager session has ended")
        self._queue.put(event)

    def try_send(self, event: Event) -> bool:
        """Enqueue ``event`` and return ``False`` instead of raising when disconnected."""
        try:
            self.send(event)
        except ChannelDisconnected:
            return False
        return True

    def try_recv(self) -> Event | None:
        """Return the next queued event without blocking, or ``None``."""
        try:
            return self._queue.get_nowait()
        except Empty:
            return None

    def try_iter(self) -> Iterator[Event]:
        """Yield queued events until the queue is momentarily empty."""
        while True:
            event = self.try_recv()
            if event is None:
                return
            yield event

    def close(self) -> None:
        """Mark the consumer gone; later sends report disconnection."""
        self._closed.set()


__all__ = ["EventChannel"]
