"""Control-plane messages carried by the event channel.

Hosts send content and configuration events; the input reader sends
``UserInput``. Each event is consumed exactly once by the reactor (or by the
initial-state builder before the reactor starts).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .input.events import InputEvent
from .state import ExitStrategy, LineNumbers


class Event:
    """Base class for every channel message."""

    def requires_immediate_screen_update(self) -> bool:
        return False


@dataclass(frozen=True)
class AppendData(Event):
    text: str


@dataclass(frozen=True)
class SetData(Event):
    text: str

    def requires_immediate_screen_update(self) -> bool:
        return True


@dataclass(frozen=True)
class SetPrompt(Event):
    text: str


@dataclass(frozen=True)
class SendMessage(Event):
    text: str


@dataclass(frozen=True)
class SetLineNumbers(Event):
    mode: LineNumbers

    def requires_immediate_screen_update(self) -> bool:
        return True


@dataclass(frozen=True)
class SetRunNoOverflow(Event):
    value: bool


@dataclass(frozen=True)
class SetExitStrategy(Event):
    strategy: ExitStrategy


@dataclass(frozen=True)
class SetInputClassifier(Event):
    classifier: Any


@dataclass(frozen=True)
class AddExitCallback(Event):
    callback: Callable[[], Any]


@dataclass(frozen=True)
class UserInput(Event):
    input_event: InputEvent

    def requires_immediate_screen_update(self) -> bool:
        return True


__all__ = [
    "AddExitCallback",
    "AppendData",
    "Event",
    "SendMessage",
    "SetData",
    "SetExitStrategy",
    "SetInputClassifier",
    "SetLineNumbers",
    "SetPrompt",
    "SetRunNoOverflow",
    "UserInput",
]
