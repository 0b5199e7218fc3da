"""Low-level terminal input decoding.

Reads raw bytes from the tty and translates them into normalized key tokens.
Handles ESC-sequence timing, UTF-8 characters, SGR mouse wheel events, and
reports terminal resizes as ``RESIZE:cols:rows`` tokens.
"""

from __future__ import annotations

import os
import select
import shutil
from collections.abc import Callable
from typing import Protocol

ESC_SEQUENCE_TIMEOUT_MS = 25
DEFAULT_TERMINAL_SIZE = (80, 24)

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x0c": "CTRL_L",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"7": "HOME",
    b"4": "END",
    b"8": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"3": "DELETE",
}


class KeySource(Protocol):
    """Anything the reader and the search prompt can pull key tokens from."""

    def poll(self, timeout: float) -> bool: ...

    def read(self) -> str: ...


def terminal_size() -> tuple[int, int]:
    """Return ``(columns, rows)`` of the controlling terminal."""
    size = shutil.get_terminal_size(DEFAULT_TERMINAL_SIZE)
    return size.columns, size.lines


def _utf8_sequence_length(first: int) -> int:
    if first >= 0xF0:
        return 4
    if first >= 0xE0:
        return 3
    if first >= 0xC0:
        return 2
    return 1


class TerminalEventSource:
    """Poll/read interface over a tty file descriptor.

    ``poll`` waits at most ``timeout`` seconds for a key or a size change;
    ``read`` then returns exactly one key token without blocking longer than
    the escape-sequence timeout.
    """

    def __init__(
        self,
        fd: int,
        size_provider: Callable[[], tuple[int, int]] = terminal_size,
    ) -> None:
        self.fd = fd
        self._size_provider = size_provider
        self._last_size = size_provider()
        self._pending_bytes: list[bytes] = []
        self._pending_resize: tuple[int, int] | None = None
        self._skip_next_lf = False

    def _check_resize(self) -> bool:
        if self._pending_resize is not None:
            return True
        size = self._size_provider()
        if size != self._last_size:
            self._last_size = size
            self._pending_resize = size
            return True
        return False

    def poll(self, timeout: float) -> bool:
        """Return whether an event is ready, waiting up to ``timeout`` seconds."""
        if self._pending_bytes or self._check_resize():
            return True
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout))
        if ready:
            return True
        return self._check_resize()

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        if self._pending_bytes:
            return self._pending_bytes.pop(0)
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def read(self) -> str:
        """Read one key token; returns ``""`` when nothing decodable was available."""
        if self._pending_resize is not None:
            cols, rows = self._pending_resize
            self._pending_resize = None
            return f"RESIZE:{cols}:{rows}"

        ch = self._read_ready_byte(0)
        if ch is None:
            return ""

        if ch == b"\n" and self._skip_next_lf:
            self._skip_next_lf = False
            return ""
        self._skip_next_lf = ch == b"\r"

        if ch in _CONTROL_KEYS:
            return _CONTROL_KEYS[ch]
        if ch == b"\x1b":
            return self._read_escape()

        first = ch[0]
        length = _utf8_sequence_length(first)
        data = ch
        while len(data) < length:
            more = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if more is None:
                break
            data += more
        return data.decode("utf-8", errors="replace")

    def _read_escape(self) -> str:
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        if seq == b"O":
            final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return "ESC"
            return _CSI_FINAL_KEYS.get(final, "ESC")
        if seq != b"[":
            self._pending_bytes.append(seq)
            return "ESC"

        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        if seq in _CSI_FINAL_KEYS:
            return _CSI_FINAL_KEYS[seq]
        if seq == b"<":
            return self._read_sgr_mouse()
        if seq in _CSI_TILDE_KEYS:
            tail = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if tail == b"~":
                return _CSI_TILDE_KEYS[seq]
            return "ESC"
        return "ESC"

    def _read_sgr_mouse(self) -> str:
        # SGR mouse: ESC [ < btn ; col ; row (M/m)
        payload: list[bytes] = []
        while True:
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return "ESC"
            if part in {b"M", b"m"}:
                break
            payload.append(part)
            if len(payload) > 64:
                return "ESC"
        try:
            btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
            btn = int(btn_s)
            col = int(col_s)
            row = int(row_s)
        except ValueError:
            return "ESC"
        is_wheel = (btn & 0b0100_0000) != 0
        if not is_wheel:
            return "MOUSE"
        button = btn & 0b11
        if button == 0:
            return f"MOUSE_WHEEL_UP:{col}:{row}"
        if button == 1:
            return f"MOUSE_WHEEL_DOWN:{col}:{row}"
        return "MOUSE"


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeySource",
    "TerminalEventSource",
    "terminal_size",
]
