"""Case-insensitive substring matching over styled display rows."""

from __future__ import annotations

from .ansi import ANSI_ESCAPE_RE

MATCH_START = "\033[7m"
MATCH_END = "\033[27m"


def row_contains(row: str, query: str) -> bool:
    """Return whether the visible text of ``row`` contains ``query``."""
    if not query:
        return False
    return query.casefold() in ANSI_ESCAPE_RE.sub("", row).casefold()


def find_match_rows(rows: list[str], query: str) -> list[int]:
    """Return indices of rows whose visible text contains ``query``."""
    if not query:
        return []
    return [idx for idx, row in enumerate(rows) if row_contains(row, query)]


def highlight_matches(text: str, query: str) -> str:
    """Wrap every visible occurrence of ``query`` in reverse video.

    Escape sequences already in ``text`` are kept in place; matching runs on
    the visible characters only.
    """
    if not text or not query:
        return text

    visible_chars: list[str] = []
    visible_start: list[int] = []
    visible_end: list[int] = []

    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                i = match.end()
                continue
        visible_start.append(i)
        visible_chars.append(text[i])
        i += 1
        visible_end.append(i)

    if not visible_chars:
        return text

    folded_text = "".join(visible_chars).casefold()
    folded_query = query.casefold()
    # casefold can change length (e.g. "ß"); fall back to plain lowercasing then.
    if len(folded_text) != len(visible_chars):
        folded_text = "".join(visible_chars).lower()
        folded_query = query.lower()

    spans: list[tuple[int, int]] = []
    cursor = 0
    while True:
        idx = folded_text.find(folded_query, cursor)
        if idx < 0:
            break
        end = idx + len(folded_query)
        spans.append((idx, end))
        cursor = max(end, idx + 1)

    if not spans:
        return text

    out: list[str] = []
    raw_cursor = 0
    for start_vis, end_vis in spans:
        if start_vis >= len(visible_start) or end_vis <= 0:
            continue
        start_raw = visible_start[start_vis]
        end_raw = visible_end[min(len(visible_end) - 1, end_vis - 1)]
        out.append(text[raw_cursor:start_raw])
        out.append(MATCH_START)
        out.append(text[start_raw:end_raw])
        out.append(MATCH_END)
        raw_cursor = end_raw
    out.append(text[raw_cursor:])
    return "".join(out)
