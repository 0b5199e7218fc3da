"""Screen painting primitives for the pager.

``draw`` clears and repaints the text area plus the prompt row. The reactor
uses ``write_prompt`` and ``write_rows`` for targeted writes that leave the
rest of the screen untouched, and ``write_lines`` dumps everything at once for
non-interactive output.
"""

from __future__ import annotations

from typing import TextIO

from .ansi import clip_ansi_line
from .matching import highlight_matches
from .state import PagerState
from .terminal import CLEAR_LINE, CLEAR_SCREEN, RESET_STYLE, REVERSE_VIDEO, cursor_to, move_cursor


def format_row(state: PagerState, text: str, index: int) -> str:
    """Return the on-screen form of row ``index``: numbered, highlighted, clipped."""
    row = text
    if state.search_term:
        row = highlight_matches(row, state.search_term)
    if state.line_numbers.is_on():
        row = f"{index + 1:>{state.line_number_width()}}. {row}"
    row = clip_ansi_line(row, state.cols)
    if "\x1b" in row:
        row += RESET_STYLE
    return row


def prompt_row_text(text: str, cols: int) -> str:
    """Render prompt text as one reverse-video row no wider than ``cols``."""
    first_line = text.splitlines()[0] if text else ""
    return f"{CLEAR_LINE}{REVERSE_VIDEO}{clip_ansi_line(first_line, cols)}{RESET_STYLE}"


def write_prompt(out: TextIO, text: str, row: int, cols: int = 10_000) -> None:
    """Replace the contents of the prompt row only."""
    move_cursor(out, 0, row)
    out.write(prompt_row_text(text, cols))
    out.flush()


def write_rows(out: TextIO, state: PagerState, rows: list[str], first_index: int, screen_row: int) -> None:
    """Write consecutive ``rows`` starting at ``screen_row`` without clearing anything.

    ``first_index`` is the position of ``rows[0]`` in ``formatted_lines`` and
    only affects line numbering.
    """
    move_cursor(out, 0, screen_row)
    out.write("\r\n".join(format_row(state, text, first_index + offset) for offset, text in enumerate(rows)))
    out.flush()


def draw(out: TextIO, state: PagerState) -> None:
    """Clear the screen and paint the visible rows plus the prompt row.

    ``upper_mark`` is re-clamped first so the painted region always satisfies
    the viewport invariant.
    """
    state.set_upper_mark(state.upper_mark)
    parts: list[str] = [CLEAR_SCREEN]
    start = state.upper_mark
    for offset in range(state.visible_line_count()):
        index = start + offset
        parts.append(cursor_to(0, offset))
        parts.append(format_row(state, state.formatted_lines[index], index))
    parts.append(cursor_to(0, state.rows))
    parts.append(prompt_row_text(state.prompt_text(), state.cols))
    out.write("".join(parts))
    out.flush()


def write_lines(out: TextIO, state: PagerState) -> None:
    """Write every formatted row once, for output that is not an interactive screen."""
    if state.formatted_lines:
        out.write("\n".join(state.formatted_lines))
        out.write("\n")
    out.flush()


__all__ = [
    "draw",
    "format_row",
    "write_lines",
    "write_prompt",
    "write_rows",
]
