"""Incremental search over formatted rows.

The query is typed at the prompt row while the input reader is suspended;
matching itself is a case-insensitive substring test on visible text.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TextIO

from .display import write_prompt
from .input.classifier import parse_key_args
from .input.key_registry import key_token_name
from .input.keys import KeySource
from .matching import find_match_rows
from .state import PagerState, SearchMode

logger = logging.getLogger(__name__)

SEARCH_POLL_SECONDS = 0.05
NOT_FOUND_MESSAGE = "Pattern not found"


def search_prompt_prefix(mode: SearchMode) -> str:
    return "?" if mode is SearchMode.REVERSE else "/"


def fetch_input(
    out: TextIO,
    source: KeySource,
    mode: SearchMode,
    row: int,
    cols: int,
    cancelled: threading.Event | None = None,
    on_resize: Callable[[int, int], tuple[int, int]] | None = None,
) -> str:
    """Read a search query typed at the prompt row.

    Returns the query on Enter, or ``""`` when the user cancels with Esc,
    Ctrl-C, or Backspace on an empty query. A ``RESIZE:c:r`` key is passed to
    ``on_resize(c, r)``, which returns the new ``(row, cols)`` of the prompt.
    """
    prefix = search_prompt_prefix(mode)
    query: list[str] = []
    write_prompt(out, prefix, row, cols)
    while cancelled is None or not cancelled.is_set():
        if not source.poll(SEARCH_POLL_SECONDS):
            continue
        key = source.read()
        if key == "ENTER":
            return "".join(query)
        if key in {"ESC", "CTRL_C"}:
            return ""
        if key == "BACKSPACE":
            if not query:
                return ""
            query.pop()
        elif len(key) == 1 and key.isprintable():
            query.append(key)
        elif key_token_name(key) == "RESIZE":
            args = parse_key_args(key)
            if on_resize is None or not args or len(args) != 2:
                continue
            row, cols = on_resize(*args)
        else:
            continue
        write_prompt(out, prefix + "".join(query), row, cols)
    return ""


def initial_match_mark(search_idx: list[int], upper_mark: int, mode: SearchMode) -> int:
    """Pick the match nearest the viewport in the search direction, wrapping around."""
    if mode is SearchMode.REVERSE:
        for mark in range(len(search_idx) - 1, -1, -1):
            if search_idx[mark] <= upper_mark:
                return mark
        return len(search_idx) - 1
    for mark, row in enumerate(search_idx):
        if row >= upper_mark:
            return mark
    return 0


def apply_search(state: PagerState, query: str, mode: SearchMode) -> bool:
    """Index ``query`` matches and scroll to the first one; returns whether any matched."""
    state.search_mode = mode
    if not query:
        return False
    matches = find_match_rows(state.formatted_lines, query)
    logger.debug("search %r (%s): %d matching rows", query, mode.value, len(matches))
    if not matches:
        state.search_term = None
        state.search_idx = []
        state.search_mark = 0
        state.send_message(NOT_FOUND_MESSAGE)
        return False
    state.search_term = query
    state.search_idx = matches
    state.search_mark = initial_match_mark(matches, state.upper_mark, mode)
    state.restore_prompt()
    jump_to_current_match(state)
    return True


def jump_to_current_match(state: PagerState) -> None:
    if not state.search_idx:
        return
    state.set_upper_mark(state.search_idx[state.search_mark])


def next_match(state: PagerState, count: int = 1) -> None:
    """Advance ``count`` matches down the buffer, stopping at the last one."""
    if not state.search_term or not state.search_idx:
        return
    state.search_mark = min(state.search_mark + max(0, count), len(state.search_idx) - 1)
    jump_to_current_match(state)


def prev_match(state: PagerState, count: int = 1) -> None:
    """Move ``count`` matches up the buffer, stopping at the first one."""
    if not state.search_term or not state.search_idx:
        return
    state.search_mark = max(state.search_mark - max(0, count), 0)
    jump_to_current_match(state)


__all__ = [
    "NOT_FOUND_MESSAGE",
    "apply_search",
    "fetch_input",
    "initial_match_mark",
    "next_match",
    "prev_match",
]
