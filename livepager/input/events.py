"""Semantic input events produced by classifying one key token.

Instances are short-lived: the reader builds one, the reactor applies it and
drops it.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..state import LineNumbers, SearchMode


@dataclass(frozen=True)
class UpdateUpperMark:
    value: int


@dataclass(frozen=True)
class UpdateTermArea:
    """New terminal dimensions, as reported by the terminal (prompt row included)."""

    cols: int
    rows: int


@dataclass(frozen=True)
class UpdateLineNumber:
    mode: LineNumbers


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class Search:
    mode: SearchMode


@dataclass(frozen=True)
class MoveToNextMatch:
    count: int = 1


@dataclass(frozen=True)
class MoveToPrevMatch:
    count: int = 1


@dataclass(frozen=True)
class RestorePrompt:
    pass


@dataclass(frozen=True)
class Number:
    """One digit of a pending repeat count; accumulated by the reader, never forwarded."""

    digit: str


InputEvent = (
    UpdateUpperMark
    | UpdateTermArea
    | UpdateLineNumber
    | Exit
    | Search
    | MoveToNextMatch
    | MoveToPrevMatch
    | RestorePrompt
    | Number
)

__all__ = [
    "Exit",
    "InputEvent",
    "MoveToNextMatch",
    "MoveToPrevMatch",
    "Number",
    "RestorePrompt",
    "Search",
    "UpdateLineNumber",
    "UpdateTermArea",
    "UpdateUpperMark",
]
