"""Host-side handle for feeding a pager session.

A ``Pager`` is cheap to create and safe to share between threads: every method
just enqueues an event. Events sent before ``page_all``/``dynamic_paging``
starts become the initial state; later ones are applied live by the reactor.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .channel import EventChannel
from .events import (
    AddExitCallback,
    AppendData,
    Event,
    SendMessage,
    SetData,
    SetExitStrategy,
    SetInputClassifier,
    SetLineNumbers,
    SetPrompt,
    SetRunNoOverflow,
)
from .state import ExitStrategy, LineNumbers


class Pager:
    """Producer handle for one pager session.

    Sending after the session has ended raises ``ChannelDisconnected``.
    """

    def __init__(self) -> None:
        self.channel = EventChannel()

    def send(self, event: Event) -> None:
        self.channel.send(event)

    def push_str(self, text: str) -> None:
        """Append ``text`` to the content."""
        self.send(AppendData(str(text)))

    def set_text(self, text: str) -> None:
        """Replace the whole content with ``text``."""
        self.send(SetData(str(text)))

    def set_prompt(self, text: str) -> None:
        self.send(SetPrompt(str(text)))

    def send_message(self, text: str) -> None:
        """Show ``text`` in the prompt slot until the user dismisses it."""
        self.send(SendMessage(str(text)))

    def set_line_numbers(self, mode: LineNumbers) -> None:
        self.send(SetLineNumbers(mode))

    def set_run_no_overflow(self, value: bool) -> None:
        """Print static content directly when it fits on one screen."""
        self.send(SetRunNoOverflow(bool(value)))

    def set_exit_strategy(self, strategy: ExitStrategy) -> None:
        self.send(SetExitStrategy(strategy))

    def set_input_classifier(self, classifier: Any) -> None:
        """Replace the key classifier; it must provide ``classify_input(key, state)``."""
        self.send(SetInputClassifier(classifier))

    def add_exit_callback(self, callback: Callable[[], Any]) -> None:
        """Run ``callback`` when the user quits, before the session tears down."""
        self.send(AddExitCallback(callback))

    @property
    def is_closed(self) -> bool:
        return self.channel.is_closed


__all__ = ["Pager"]
