"""Reactor loop: the single consumer of the event channel.

The reactor is the only code path that paints the screen. For each event it
takes the state lock, applies the event, and picks the cheapest write that
keeps the terminal consistent with the state: nothing, the prompt row, the
newly appended rows, or a full redraw.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TextIO

from ..channel import EventChannel
from ..display import draw, write_prompt, write_rows
from ..errors import SessionIOError
from ..events import AppendData, Event, SendMessage, SetPrompt, UserInput
from ..state import PagerState
from .handler import InteractiveInput, handle_event

logger = logging.getLogger(__name__)


class RunMode(enum.Enum):
    """Static renders one bounded view; dynamic follows a live append stream."""

    STATIC = "static"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class ReactorTiming:
    """Timing constants controlling the reactor's idle behavior."""

    idle_seconds: float = 0.005


def run_reactor(
    channel: EventChannel,
    state: PagerState,
    out: TextIO,
    run_mode: RunMode,
    interactive: InteractiveInput | None = None,
    timing: ReactorTiming = ReactorTiming(),
) -> None:
    """Paint the initial screen, then react to events until the exit flag is set.

    Terminal write failures end the session with ``SessionIOError``.
    """
    try:
        with state.lock:
            draw(out, state)
        if run_mode is RunMode.DYNAMIC:
            _run_dynamic(channel, state, out, interactive, timing)
        else:
            _run_static(channel, state, out, interactive, timing)
    except OSError as exc:
        logger.error("terminal write failed: %s", exc)
        raise SessionIOError(f"terminal I/O failed: {exc}") from exc


def _next_event(channel: EventChannel, state: PagerState, timing: ReactorTiming) -> Event | None:
    event = channel.try_recv()
    if event is None:
        state.exit_event.wait(timing.idle_seconds)
    return event


def _run_dynamic(
    channel: EventChannel,
    state: PagerState,
    out: TextIO,
    interactive: InteractiveInput | None,
    timing: ReactorTiming,
) -> None:
    while not state.is_exited:
        event = _next_event(channel, state, timing)
        if event is None:
            continue

        if event.requires_immediate_screen_update():
            with state.lock:
                handle_event(event, out, state, interactive)
                if not state.is_exited:
                    draw(out, state)
        elif isinstance(event, (SetPrompt, SendMessage)):
            with state.lock:
                handle_event(event, out, state, interactive)
                write_prompt(out, state.prompt_text(), state.rows, state.cols)
        elif isinstance(event, AppendData):
            with state.lock:
                append_data(out, state, event.text)
        else:
            with state.lock:
                handle_event(event, out, state, interactive)


def append_data(out: TextIO, state: PagerState, text: str) -> int:
    """Append ``text`` to the state, painting new rows only while the screen has room.

    Returns how many rows were written to the terminal. Every formatted row is
    stored regardless; once the text area is full nothing is painted until the
    next full redraw. When the line-number gutter widens every row is re-wrapped
    and the whole screen is repainted instead; that case returns 0.
    """
    new_rows = state.make_append_lines(text)
    first_index = state.num_lines()
    visible = state.visible_line_count()
    if not state.append_formatted(text, new_rows):
        draw(out, state)
        return 0
    written = 0
    if visible < state.rows:
        # One row is held back from the free space; the next redraw fills it.
        available = max(0, state.rows - (visible + 1))
        written = min(len(new_rows), available)
        if written:
            rows = state.formatted_lines[first_index : first_index + written]
            write_rows(out, state, rows, first_index=first_index, screen_row=visible)
    return written


def _run_static(
    channel: EventChannel,
    state: PagerState,
    out: TextIO,
    interactive: InteractiveInput | None,
    timing: ReactorTiming,
) -> None:
    while not state.is_exited:
        event = _next_event(channel, state, timing)
        if event is None:
            continue
        if not isinstance(event, UserInput):
            logger.debug("static mode ignores %s", type(event).__name__)
            continue
        with state.lock:
            handle_event(event, out, state, interactive)
            if not state.is_exited:
                draw(out, state)


__all__ = ["ReactorTiming", "RunMode", "append_data", "run_reactor"]
