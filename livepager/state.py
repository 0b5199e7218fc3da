"""Canonical pager state shared by the input reader and the reactor.

Everything that decides what is on screen lives in one ``PagerState``.
Callers hold ``state.lock`` around every read-modify-write so a redraw always
sees a consistent snapshot.
"""

from __future__ import annotations

import enum
import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .ansi import split_logical_lines, wrap_lines
from .matching import find_match_rows

USIZE_MAX = sys.maxsize
DEFAULT_PROMPT = "livepager"


def saturating_add(value: int, delta: int) -> int:
    """Add ``delta`` to ``value`` clamping the result to ``[0, USIZE_MAX]``."""
    return max(0, min(USIZE_MAX, value + delta))


def saturating_sub(value: int, delta: int) -> int:
    """Subtract ``delta`` from ``value`` clamping the result to ``[0, USIZE_MAX]``."""
    return max(0, min(USIZE_MAX, value - delta))


class LineNumbers(enum.Enum):
    """Line-number display policy.

    ``ENABLED`` and ``DISABLED`` are fixed by the host; ``YES`` and ``NO`` can
    be flipped by the user.
    """

    ENABLED = "enabled"
    YES = "yes"
    NO = "no"
    DISABLED = "disabled"

    def toggled(self) -> LineNumbers:
        if self is LineNumbers.YES:
            return LineNumbers.NO
        if self is LineNumbers.NO:
            return LineNumbers.YES
        return self

    def __invert__(self) -> LineNumbers:
        return self.toggled()

    def is_on(self) -> bool:
        return self in {LineNumbers.ENABLED, LineNumbers.YES}


class SearchMode(enum.Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


class ExitStrategy(enum.Enum):
    """What happens after the user quits an interactive session."""

    PAGER_QUIT = "pager_quit"
    PROCESS_QUIT = "process_quit"


@dataclass
class PagerState:
    rows: int = 23
    cols: int = 80
    lines: list[str] = field(default_factory=list)
    formatted_lines: list[str] = field(default_factory=list)
    upper_mark: int = 0
    line_numbers: LineNumbers = LineNumbers.NO
    prompt: str = DEFAULT_PROMPT
    message: str | None = None
    run_no_overflow: bool = False
    prefix_num: str = ""
    search_mode: SearchMode = SearchMode.FORWARD
    search_term: str | None = None
    search_idx: list[int] = field(default_factory=list)
    search_mark: int = 0
    exit_strategy: ExitStrategy = ExitStrategy.PAGER_QUIT
    exit_callbacks: list[Callable[[], Any]] = field(default_factory=list)
    input_classifier: Any = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)
    exit_event: threading.Event = field(default_factory=threading.Event, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.input_classifier is None:
            from .input.classifier import DefaultInputClassifier

            self.input_classifier = DefaultInputClassifier()

    @classmethod
    def for_terminal(cls, columns: int, terminal_rows: int, **kwargs: Any) -> PagerState:
        """Create a state sized for a terminal, reserving the last row for the prompt."""
        return cls(rows=max(1, terminal_rows - 1), cols=max(1, columns), **kwargs)

    # Queries

    def num_lines(self) -> int:
        return len(self.formatted_lines)

    def visible_line_count(self) -> int:
        """Return how many text rows are currently painted below ``upper_mark``."""
        return max(0, min(self.rows, self.num_lines() - self.upper_mark))

    def max_upper_mark(self) -> int:
        return max(0, self.num_lines() - self.rows)

    def prefix_count(self, default: int = 1) -> int:
        """Return the pending numeric repeat count, or ``default`` when none is typed."""
        if not self.prefix_num:
            return default
        try:
            return int(self.prefix_num)
        except ValueError:
            return default

    def prompt_text(self) -> str:
        """Return the text shown in the prompt slot; a message overrides the prompt."""
        return self.message if self.message is not None else self.prompt

    def line_number_width(self, row_count: int | None = None) -> int:
        """Return the digit count of the largest line number for ``row_count`` rows."""
        count = self.num_lines() if row_count is None else row_count
        return len(str(max(1, count)))

    def gutter_width(self, row_count: int | None = None) -> int:
        """Return the columns taken by the ``"N. "`` prefix, or 0 with numbering off."""
        if not self.line_numbers.is_on():
            return 0
        return self.line_number_width(row_count) + 2

    def text_width(self, row_count: int | None = None) -> int:
        """Return the columns left for text once the gutter is drawn."""
        return max(1, self.cols - self.gutter_width(row_count))

    @property
    def is_exited(self) -> bool:
        return self.exit_event.is_set()

    # Mutations

    def set_upper_mark(self, value: int) -> None:
        """Move the viewport, clamping so the last screen stays full.

        With no more rows than fit on screen the viewport is pinned to the top.
        """
        if self.num_lines() > self.rows:
            self.upper_mark = max(0, min(value, self.max_upper_mark()))
        else:
            self.upper_mark = 0

    def make_append_lines(self, text: str) -> list[str]:
        """Format ``text`` into display rows for the current width without storing them.

        The rows are wrapped to the width left after the line-number gutter
        that the grown content will need.
        """
        logical = split_logical_lines(text)
        count = self.num_lines() + len(logical)
        while True:
            rows = wrap_lines(logical, self.text_width(count))
            total = self.num_lines() + len(rows)
            if self.gutter_width(total) <= self.gutter_width(count):
                return rows
            count = total

    def append_str(self, text: str) -> list[str]:
        """Store ``text`` and return the rows it added to ``formatted_lines``."""
        offset = self.num_lines()
        self.append_formatted(text, self.make_append_lines(text))
        return self.formatted_lines[offset:]

    def append_formatted(self, text: str, new_rows: list[str]) -> bool:
        """Store rows already produced by ``make_append_lines`` for ``text``.

        Returns False when the gutter grew a digit. Every row was re-wrapped
        in that case, so rows already on screen are stale.
        """
        offset = len(self.formatted_lines)
        self.lines.extend(split_logical_lines(text))
        if self.gutter_width(offset + len(new_rows)) != self.gutter_width(offset):
            self._rewrap()
            return False
        self.formatted_lines.extend(new_rows)
        if self.search_term:
            self.search_idx.extend(offset + row for row in find_match_rows(new_rows, self.search_term))
        return True

    def set_text(self, text: str) -> None:
        """Replace all content and return the viewport to the top."""
        self.lines = split_logical_lines(text)
        self.upper_mark = 0
        self.search_mark = 0
        self._rewrap()

    def set_line_numbers(self, mode: LineNumbers) -> None:
        """Switch the numbering policy, re-wrapping when the gutter appears or goes."""
        changed = mode.is_on() != self.line_numbers.is_on()
        self.line_numbers = mode
        if changed:
            self._rewrap()
            self.set_upper_mark(self.upper_mark)

    def resize(self, columns: int, terminal_rows: int) -> None:
        """Apply a terminal resize; re-wraps content when the width changed."""
        columns = max(1, columns)
        self.rows = max(1, terminal_rows - 1)
        if columns != self.cols:
            self.cols = columns
            self._rewrap()
        self.set_upper_mark(self.upper_mark)

    def set_prompt(self, text: str) -> None:
        self.prompt = text

    def send_message(self, text: str) -> None:
        self.message = text

    def restore_prompt(self) -> None:
        self.message = None

    def exit(self) -> None:
        """Set the cancellation token observed by both loops."""
        self.exit_event.set()

    def _rewrap(self) -> None:
        # The gutter depends on the row count, which depends on the gutter.
        # Narrowing only adds rows, so this settles after a digit or two.
        count = len(self.lines)
        while True:
            rows = wrap_lines(self.lines, self.text_width(count))
            if self.gutter_width(len(rows)) <= self.gutter_width(count):
                break
            count = len(rows)
        self.formatted_lines = rows
        self._refresh_search_index()

    def _refresh_search_index(self) -> None:
        if not self.search_term:
            self.search_idx = []
            return
        self.search_idx = find_match_rows(self.formatted_lines, self.search_term)
        if self.search_mark >= len(self.search_idx):
            self.search_mark = max(0, len(self.search_idx) - 1)


__all__ = [
    "DEFAULT_PROMPT",
    "ExitStrategy",
    "LineNumbers",
    "PagerState",
    "SearchMode",
    "USIZE_MAX",
    "saturating_add",
    "saturating_sub",
]
