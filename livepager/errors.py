"""Error taxonomy for pager sessions.

Setup failures surface before any loop starts, I/O failures end a running
session, and channel disconnection only tells producers the session is gone.
"""

from __future__ import annotations


class PagerError(Exception):
    """Base class for every error raised by livepager."""


class TerminalSetupError(PagerError):
    """The terminal could not be switched into interactive mode."""


class SessionIOError(PagerError):
    """Reading from or writing to the terminal failed during a session."""


class ChannelDisconnected(PagerError):
    """An event was sent after the consuming session had ended."""


__all__ = [
    "PagerError",
    "TerminalSetupError",
    "SessionIOError",
    "ChannelDisconnected",
]
