"""Apply channel events to ``PagerState``.

``handle_event`` is shared by the initial-state builder and the reactor. It
only mutates state; deciding what to repaint is the reactor's job. The one
exception is the search prompt, which owns the prompt row and the input
device while the user types a query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TextIO

from .. import search
from ..ansi import wrap_str
from ..display import draw
from ..events import (
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
    UserInput,
)
from ..input.events import (
    Exit,
    InputEvent,
    MoveToNextMatch,
    MoveToPrevMatch,
    RestorePrompt,
    Search,
    UpdateLineNumber,
    UpdateTermArea,
    UpdateUpperMark,
)
from ..input.keys import KeySource
from ..state import PagerState
from .reader import InputControl

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InteractiveInput:
    """Terminal input handles available once an interactive session is running."""

    source: KeySource
    control: InputControl


def format_prompt_text(text: str, cols: int) -> str:
    """Return the first display row of ``text`` wrapped to ``cols``."""
    rows = wrap_str(text, cols)
    return rows[0] if rows else ""


def handle_event(
    event: Event,
    out: TextIO,
    state: PagerState,
    interactive: InteractiveInput | None = None,
) -> None:
    """Apply ``event`` to ``state``; the caller holds ``state.lock``."""
    if isinstance(event, AppendData):
        state.append_str(event.text)
    elif isinstance(event, SetData):
        state.set_text(event.text)
    elif isinstance(event, SetPrompt):
        state.set_prompt(format_prompt_text(event.text, state.cols))
    elif isinstance(event, SendMessage):
        state.send_message(format_prompt_text(event.text, state.cols))
    elif isinstance(event, SetLineNumbers):
        state.set_line_numbers(event.mode)
    elif isinstance(event, SetRunNoOverflow):
        state.run_no_overflow = event.value
    elif isinstance(event, SetExitStrategy):
        state.exit_strategy = event.strategy
    elif isinstance(event, SetInputClassifier):
        state.input_classifier = event.classifier
    elif isinstance(event, AddExitCallback):
        state.exit_callbacks.append(event.callback)
    elif isinstance(event, UserInput):
        apply_input(event.input_event, out, state, interactive)
    else:
        logger.warning("ignoring unknown event %r", event)


def apply_input(
    input_event: InputEvent,
    out: TextIO,
    state: PagerState,
    interactive: InteractiveInput | None = None,
) -> None:
    """Realize one classified input event as state mutations."""
    if isinstance(input_event, UpdateUpperMark):
        state.set_upper_mark(input_event.value)
    elif isinstance(input_event, UpdateTermArea):
        state.resize(input_event.cols, input_event.rows)
    elif isinstance(input_event, UpdateLineNumber):
        state.set_line_numbers(input_event.mode)
    elif isinstance(input_event, RestorePrompt):
        state.restore_prompt()
    elif isinstance(input_event, Exit):
        _run_exit(state)
    elif isinstance(input_event, Search):
        _run_search(input_event, out, state, interactive)
    elif isinstance(input_event, MoveToNextMatch):
        search.next_match(state, input_event.count)
    elif isinstance(input_event, MoveToPrevMatch):
        search.prev_match(state, input_event.count)


def _run_exit(state: PagerState) -> None:
    if state.is_exited:
        return
    logger.debug("user requested exit; running %d exit callbacks", len(state.exit_callbacks))
    for callback in state.exit_callbacks:
        callback()
    state.exit()


def _run_search(
    input_event: Search,
    out: TextIO,
    state: PagerState,
    interactive: InteractiveInput | None,
) -> None:
    state.search_mode = input_event.mode
    if interactive is None:
        return

    def resize_during_search(columns: int, terminal_rows: int) -> tuple[int, int]:
        state.resize(columns, terminal_rows)
        draw(out, state)
        return state.rows, state.cols

    with interactive.control.suspended():
        query = search.fetch_input(
            out,
            interactive.source,
            input_event.mode,
            row=state.rows,
            cols=state.cols,
            cancelled=state.exit_event,
            on_resize=resize_during_search,
        )
    search.apply_search(state, query, input_event.mode)
