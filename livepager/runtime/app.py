"""Session bootstrap: initial state, mode selection, and terminal lifecycle.

``init_core`` turns a ``Pager`` handle into a running session. Events the host
queued before paging started are folded into the initial state without any
drawing. Output that is not going to a terminal, and static output that fits
the screen, is printed directly instead of opening an interactive view.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, TextIO

from ..channel import EventChannel
from ..config import PagerConfig, load_pager_config
from ..display import write_lines
from ..errors import SessionIOError, TerminalSetupError
from ..input.keys import TerminalEventSource, terminal_size
from ..logs import resolve_log_path, setup_logging
from ..state import ExitStrategy, PagerState
from ..terminal import TerminalController
from .handler import InteractiveInput, handle_event
from .loop import ReactorTiming, RunMode, run_reactor
from .reader import InputControl, InputReader

if TYPE_CHECKING:
    from ..pager import Pager

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"
READER_JOIN_SECONDS = 1.0


def generate_initial_state(
    channel: EventChannel,
    config: PagerConfig | None = None,
    size: tuple[int, int] | None = None,
) -> PagerState:
    """Build a state from config defaults, then apply every event already queued.

    ``size`` is ``(columns, terminal_rows)``; the last terminal row is kept for
    the prompt. Nothing is drawn and no terminal input is read here.
    """
    config = config if config is not None else PagerConfig()
    columns, terminal_rows = size if size is not None else terminal_size()
    state = PagerState.for_terminal(
        columns,
        terminal_rows,
        line_numbers=config.line_numbers,
        prompt=config.prompt,
        run_no_overflow=config.run_no_overflow,
    )
    applied = 0
    for event in channel.try_iter():
        handle_event(event, sys.stdout, state)
        applied += 1
    logger.debug("initial state built from %d queued events", applied)
    return state


def _isatty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def should_print_directly(state: PagerState, out: TextIO, run_mode: RunMode) -> bool:
    """Return whether the session can skip the interactive view.

    Output that is not a terminal is always dumped. Content that fits the
    screen is dumped only for static sessions with ``run_no_overflow`` set.
    """
    if not _isatty(out):
        return True
    return run_mode is RunMode.STATIC and state.run_no_overflow and state.num_lines() <= state.rows


def open_input_fd() -> tuple[int, bool]:
    """Return ``(fd, owned)`` for reading keys; piped stdin falls back to the tty."""
    try:
        stdin_fd = sys.stdin.fileno()
    except (AttributeError, ValueError, OSError):
        stdin_fd = -1
    if stdin_fd >= 0 and os.isatty(stdin_fd):
        return stdin_fd, False
    try:
        return os.open(TTY_PATH, os.O_RDONLY), True
    except OSError as exc:
        raise TerminalSetupError(f"cannot open {TTY_PATH} for keyboard input: {exc}") from exc


def _output_fd(out: TextIO) -> int:
    try:
        return out.fileno()
    except (AttributeError, ValueError, OSError) as exc:
        raise TerminalSetupError(f"output stream has no terminal descriptor: {exc}") from exc


def run_session(
    channel: EventChannel,
    state: PagerState,
    out: TextIO,
    run_mode: RunMode,
    controller: TerminalController,
    source: TerminalEventSource,
    timing: ReactorTiming = ReactorTiming(),
) -> None:
    """Run the reader thread and the reactor inside raw mode until the user quits.

    The terminal is restored, the channel closed, and the reader stopped
    before this returns or raises.
    """
    control = InputControl()
    reader = InputReader(channel, state, source, control)
    interactive = InteractiveInput(source, control)
    with controller.raw_mode():
        reader.start()
        try:
            run_reactor(channel, state, out, run_mode, interactive, timing)
        finally:
            state.exit()
            channel.close()
            reader.join(READER_JOIN_SECONDS)
    if reader.error is not None:
        raise SessionIOError(f"reading terminal input failed: {reader.error}") from reader.error


def init_core(pager: Pager, run_mode: RunMode, out: TextIO | None = None) -> None:
    """Start a pager session for ``pager`` and block until it ends.

    Raises ``TerminalSetupError`` when no interactive terminal is available
    and ``SessionIOError`` when terminal I/O fails mid-session. With the
    ``PROCESS_QUIT`` exit strategy the process exits after the terminal has
    been restored.
    """
    out = out if out is not None else sys.stdout
    config = load_pager_config()
    setup_logging(resolve_log_path(config.log_file), config.log_level)

    channel = pager.channel
    state = generate_initial_state(channel, config, terminal_size())
    logger.info(
        "starting %s session: %d cols x %d rows, %d lines",
        run_mode.value,
        state.cols,
        state.rows,
        state.num_lines(),
    )

    if should_print_directly(state, out, run_mode):
        logger.info("%s output printed directly", run_mode.value)
        channel.close()
        write_lines(out, state)
        return

    input_fd, owned = -1, False
    try:
        input_fd, owned = open_input_fd()
        controller = TerminalController(input_fd, _output_fd(out))
        run_session(channel, state, out, run_mode, controller, TerminalEventSource(input_fd))
    finally:
        channel.close()
        if owned:
            os.close(input_fd)
    logger.info("session ended")

    if state.exit_strategy is ExitStrategy.PROCESS_QUIT:
        raise SystemExit(0)


def page_all(pager: Pager) -> None:
    """Page everything sent so far as a static view; blocks until the user quits."""
    init_core(pager, RunMode.STATIC)


def dynamic_paging(pager: Pager) -> None:
    """Page a live stream; the host keeps sending through ``pager`` from other threads."""
    init_core(pager, RunMode.DYNAMIC)


__all__ = [
    "RunMode",
    "dynamic_paging",
    "generate_initial_state",
    "init_core",
    "open_input_fd",
    "page_all",
    "run_session",
    "should_print_directly",
]
