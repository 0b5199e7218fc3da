"""Input reader loop running beside the reactor.

The reader polls the terminal with a short timeout, classifies each key token
against the shared state, and forwards the result to the reactor through the
event channel. Repeat-count digits are accumulated here and never forwarded.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import time
from collections.abc import Iterator

from ..channel import EventChannel
from ..events import UserInput
from ..input.classifier import classify_input
from ..input.events import Number
from ..input.keys import KeySource
from ..state import PagerState

logger = logging.getLogger(__name__)

POLL_SECONDS = 0.01


class InputControl:
    """Suspend/resume switch over the reader's use of the terminal input device.

    ``suspend`` returns only after any poll/read already in flight has
    finished, so the caller owns the device until ``resume``. Pending terminal
    input is left untouched while suspended.
    """

    def __init__(self) -> None:
        self._running = threading.Event()
        self._running.set()
        self.input_lock = threading.Lock()

    @property
    def is_suspended(self) -> bool:
        return not self._running.is_set()

    def suspend(self) -> None:
        self._running.clear()
        with self.input_lock:
            pass

    def resume(self) -> None:
        self._running.set()

    @contextlib.contextmanager
    def suspended(self) -> Iterator[None]:
        self.suspend()
        try:
            yield
        finally:
            self.resume()


class InputReader:
    """Owns the reader loop; ``error`` holds the ``OSError`` that ended it, if any."""

    def __init__(
        self,
        channel: EventChannel,
        state: PagerState,
        source: KeySource,
        control: InputControl | None = None,
        poll_seconds: float = POLL_SECONDS,
    ) -> None:
        self.channel = channel
        self.state = state
        self.source = source
        self.control = control if control is not None else InputControl()
        self.poll_seconds = poll_seconds
        self.error: OSError | None = None
        self._thread: threading.Thread | None = None

    def _should_stop(self) -> bool:
        return self.state.is_exited or self.channel.is_closed

    def _read_key(self) -> str | None:
        """Poll and read one token while holding the input lock; ``None`` when idle."""
        with self.control.input_lock:
            if self.control.is_suspended:
                return None
            if not self.source.poll(self.poll_seconds):
                return None
            return self.source.read()

    def run(self) -> None:
        """Reader loop body; returns on exit, disconnection, or an input error."""
        logger.debug("input reader started")
        while not self._should_stop():
            if self.control.is_suspended:
                time.sleep(self.poll_seconds)
                continue
            try:
                key = self._read_key()
            except OSError as exc:
                logger.error("reading terminal input failed: %s", exc)
                self.error = exc
                self.state.exit()
                return
            if not key:
                continue

            with self.state.lock:
                input_event = classify_input(key, self.state)
                if isinstance(input_event, Number):
                    self.state.prefix_num += input_event.digit
                    continue
                self.state.prefix_num = ""
            if input_event is None:
                continue
            if not self.channel.try_send(UserInput(input_event)):
                logger.debug("event channel disconnected; input reader stopping")
                return
        logger.debug("input reader stopped")

    def start(self) -> threading.Thread:
        thread = threading.Thread(target=self.run, name="livepager-input-reader", daemon=True)
        self._thread = thread
        thread.start()
        return thread

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)


__all__ = ["InputControl", "InputReader", "POLL_SECONDS"]
