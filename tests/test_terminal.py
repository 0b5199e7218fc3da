"""Tests for terminal mode control sequences.

Verifies raw-mode lifecycle safety and the escape sequences written on entry
and exit. These guard the low-level terminal contract used by sessions.
"""

from __future__ import annotations

import io
import termios
import unittest
from unittest import mock

from livepager.errors import TerminalSetupError
from livepager.terminal import TerminalController, cursor_to, move_cursor


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("livepager.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "livepager.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("livepager.terminal.os.write") as write_mock, mock.patch(
            "livepager.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?1000l\x1b[?1006l\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("livepager.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_unreadable_terminal_is_a_setup_error(self) -> None:
        with mock.patch("livepager.terminal.termios.tcgetattr", side_effect=termios.error(25, "not a tty")):
            with self.assertRaises(TerminalSetupError):
                TerminalController(stdin_fd=0, stdout_fd=1)

    def test_failed_entry_restores_saved_state(self) -> None:
        saved_state = [4, 5, 6]
        with mock.patch("livepager.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "livepager.terminal.tty.setraw"
        ), mock.patch("livepager.terminal.os.write", side_effect=OSError("closed")), mock.patch(
            "livepager.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            with self.assertRaises(TerminalSetupError):
                controller.enable_tui_mode()

        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_cursor_moves_are_one_based(self) -> None:
        self.assertEqual(cursor_to(0, 0), "\x1b[1;1H")
        self.assertEqual(cursor_to(4, 9), "\x1b[10;5H")
        out = io.StringIO()
        move_cursor(out, 2, 3)
        self.assertEqual(out.getvalue(), "\x1b[4;3H")


if __name__ == "__main__":
    unittest.main()
