"""Terminal control helpers for the pager session.

Owns raw-mode lifecycle, alternate-screen switching, and mouse-wheel
reporting, plus the small set of cursor sequences the display layer writes.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty
from typing import TextIO

from .errors import TerminalSetupError

logger = logging.getLogger(__name__)

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"
LEAVE_TUI_SEQUENCE = b"\x1b[?1000l\x1b[?1006l\x1b[?25h\x1b[?1049l"
CLEAR_SCREEN = "\x1b[2J\x1b[H"
CLEAR_LINE = "\x1b[2K"
REVERSE_VIDEO = "\x1b[7m"
RESET_STYLE = "\x1b[0m"


def cursor_to(col: int, row: int) -> str:
    """Return the sequence moving the cursor to 0-based ``(col, row)``."""
    return f"\x1b[{max(0, row) + 1};{max(0, col) + 1}H"


def move_cursor(out: TextIO, col: int, row: int, flush: bool = False) -> None:
    """Move the cursor of ``out`` to 0-based ``(col, row)``."""
    out.write(cursor_to(col, row))
    if flush:
        out.flush()


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except (termios.error, OSError) as exc:
            raise TerminalSetupError(f"cannot read terminal attributes: {exc}") from exc
        self._tui_enabled = False

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with mouse-wheel reporting enabled."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
            self._tui_enabled = True
            # Enter alternate screen, hide cursor, and enable SGR mouse reporting.
            os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        except (termios.error, OSError) as exc:
            if self._tui_enabled:
                self._tui_enabled = False
                termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
            raise TerminalSetupError(f"cannot enter raw mode: {exc}") from exc

    def disable_tui_mode(self) -> None:
        """Restore the saved terminal state and leave the alternate screen."""
        try:
            os.write(self.stdout_fd, LEAVE_TUI_SEQUENCE)
        finally:
            self._tui_enabled = False
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        self.enable_tui_mode()
        try:
            yield
        finally:
            logger.debug("restoring terminal mode")
            self.disable_tui_mode()
