"""Input-layer public API for key decoding and classification.

Exports are split between low-level terminal decoding (``TerminalEventSource``)
and the classifier that maps key tokens onto pager input events.
"""

from .classifier import DefaultInputClassifier, classify_input
from .events import (
    Exit,
    InputEvent,
    MoveToNextMatch,
    MoveToPrevMatch,
    Number,
    RestorePrompt,
    Search,
    UpdateLineNumber,
    UpdateTermArea,
    UpdateUpperMark,
)
from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import ESC_SEQUENCE_TIMEOUT_MS, TerminalEventSource, terminal_size

__all__ = [
    "DefaultInputClassifier",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Exit",
    "InputEvent",
    "KeyComboBinding",
    "KeyComboRegistry",
    "MoveToNextMatch",
    "MoveToPrevMatch",
    "Number",
    "RestorePrompt",
    "Search",
    "TerminalEventSource",
    "UpdateLineNumber",
    "UpdateTermArea",
    "UpdateUpperMark",
    "classify_input",
    "terminal_size",
]
