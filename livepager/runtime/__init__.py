"""Session runtime: reader thread, reactor loop, and bootstrap.

Entry points are imported lazily so that importing ``livepager`` does not pull
in terminal setup code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import ReactorTiming, RunMode


def page_all(*args, **kwargs):
    """Lazily import the static entry point."""
    from .app import page_all as _page_all

    return _page_all(*args, **kwargs)


def dynamic_paging(*args, **kwargs):
    """Lazily import the dynamic entry point."""
    from .app import dynamic_paging as _dynamic_paging

    return _dynamic_paging(*args, **kwargs)


def run_reactor(*args, **kwargs):
    """Lazily import the reactor to avoid package-import cycles."""
    from .loop import run_reactor as _run_reactor

    return _run_reactor(*args, **kwargs)


def __getattr__(name: str):
    if name in {"ReactorTiming", "RunMode"}:
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ReactorTiming",
    "RunMode",
    "dynamic_paging",
    "page_all",
    "run_reactor",
]
