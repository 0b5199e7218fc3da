"""Public package surface for livepager.

Hosts create a ``Pager``, send content through it, and hand it to
``page_all`` (static) or ``dynamic_paging`` (live stream). Session entry
points are imported lazily to keep package imports lightweight.
"""

from __future__ import annotations

from . import logs as _logs  # noqa: F401  installs the package NullHandler
from .errors import ChannelDisconnected, PagerError, SessionIOError, TerminalSetupError
from .pager import Pager
from .state import ExitStrategy, LineNumbers, SearchMode


def page_all(*args, **kwargs):
    """Lazily import the static entry point."""
    from .runtime.app import page_all as _page_all

    return _page_all(*args, **kwargs)


def dynamic_paging(*args, **kwargs):
    """Lazily import the dynamic entry point."""
    from .runtime.app import dynamic_paging as _dynamic_paging

    return _dynamic_paging(*args, **kwargs)


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "ChannelDisconnected",
    "ExitStrategy",
    "LineNumbers",
    "Pager",
    "PagerError",
    "SearchMode",
    "SessionIOError",
    "TerminalSetupError",
    "dynamic_paging",
    "main",
    "page_all",
]
