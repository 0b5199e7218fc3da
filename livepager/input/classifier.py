"""Key-token classification into semantic pager input events.

``classify_input`` is a pure function of one key token and the current
``PagerState``. The reader calls it with the state lock held and forwards the
result to the reactor.
"""

from __future__ import annotations

from ..state import USIZE_MAX, PagerState, SearchMode, saturating_add, saturating_sub
from .events import (
    Exit,
    InputEvent,
    MoveToNextMatch,
    MoveToPrevMatch,
    Number,
    RestorePrompt,
    Search,
    UpdateLineNumber,
    UpdateTermArea,
    UpdateUpperMark,
)
from .key_registry import KeyComboBinding, KeyComboRegistry, key_token_name

MOUSE_SCROLL_LINES = 5
DIGIT_KEYS: tuple[str, ...] = tuple("0123456789")


def parse_key_args(key: str) -> tuple[int, ...] | None:
    """Parse integer ``:arg`` payloads from tokens like ``RESIZE:80:24``."""
    parts = key.split(":")[1:]
    try:
        return tuple(int(part) for part in parts)
    except ValueError:
        return None


def _line_down(_key: str, state: PagerState) -> InputEvent:
    return UpdateUpperMark(saturating_add(state.upper_mark, state.prefix_count()))


def _line_up(_key: str, state: PagerState) -> InputEvent:
    return UpdateUpperMark(saturating_sub(state.upper_mark, state.prefix_count()))


def _go_top(_key: str, _state: PagerState) -> InputEvent:
    return UpdateUpperMark(0)


def _go_bottom(_key: str, _state: PagerState) -> InputEvent:
    return UpdateUpperMark(USIZE_MAX - 1)


def _page_up(_key: str, state: PagerState) -> InputEvent:
    return UpdateUpperMark(saturating_sub(state.upper_mark, saturating_add(state.rows, 1)))


def _page_down(_key: str, state: PagerState) -> InputEvent:
    return UpdateUpperMark(saturating_add(state.upper_mark, saturating_add(state.rows, 1)))


def _half_page_down(_key: str, state: PagerState) -> InputEvent:
    return UpdateUpperMark(saturating_add(state.upper_mark, state.rows // 2))


def _half_page_up(_key: str, state: PagerState) -> InputEvent:
    return UpdateUpperMark(saturating_sub(state.upper_mark, state.rows // 2))


def _enter(key: str, state: PagerState) -> InputEvent:
    if state.message is not None:
        return RestorePrompt()
    return _line_down(key, state)


def _resize(key: str, _state: PagerState) -> InputEvent | None:
    args = parse_key_args(key)
    if not args or len(args) != 2:
        return None
    cols, rows = args
    return UpdateTermArea(cols, rows)


def _wheel_down(_key: str, state: PagerState) -> InputEvent:
    return UpdateUpperMark(saturating_add(state.upper_mark, MOUSE_SCROLL_LINES))


def _wheel_up(_key: str, state: PagerState) -> InputEvent:
    return UpdateUpperMark(saturating_sub(state.upper_mark, MOUSE_SCROLL_LINES))


def _toggle_line_numbers(_key: str, state: PagerState) -> InputEvent:
    return UpdateLineNumber(~state.line_numbers)


def _exit(_key: str, _state: PagerState) -> InputEvent:
    return Exit()


def _digit(key: str, _state: PagerState) -> InputEvent:
    return Number(key)


def _search_forward(_key: str, _state: PagerState) -> InputEvent:
    return Search(SearchMode.FORWARD)


def _search_reverse(_key: str, _state: PagerState) -> InputEvent:
    return Search(SearchMode.REVERSE)


def _next_match(_key: str, state: PagerState) -> InputEvent:
    count = state.prefix_count()
    if state.search_mode is SearchMode.REVERSE:
        return MoveToPrevMatch(count)
    return MoveToNextMatch(count)


def _prev_match(_key: str, state: PagerState) -> InputEvent:
    count = state.prefix_count()
    if state.search_mode is SearchMode.REVERSE:
        return MoveToNextMatch(count)
    return MoveToPrevMatch(count)


DEFAULT_BINDINGS: tuple[KeyComboBinding, ...] = (
    KeyComboBinding(("DOWN", "j"), _line_down),
    KeyComboBinding(("UP", "k"), _line_up),
    KeyComboBinding(("g", "HOME"), _go_top),
    KeyComboBinding(("G", "END"), _go_bottom),
    KeyComboBinding(("PAGE_UP",), _page_up),
    KeyComboBinding(("PAGE_DOWN", " "), _page_down),
    KeyComboBinding(("CTRL_D",), _half_page_down),
    KeyComboBinding(("CTRL_U",), _half_page_up),
    KeyComboBinding(("ENTER",), _enter),
    KeyComboBinding(("RESIZE",), _resize),
    KeyComboBinding(("MOUSE_WHEEL_DOWN",), _wheel_down),
    KeyComboBinding(("MOUSE_WHEEL_UP",), _wheel_up),
    KeyComboBinding(("CTRL_L",), _toggle_line_numbers),
    KeyComboBinding(("q", "CTRL_C"), _exit),
    KeyComboBinding(DIGIT_KEYS, _digit),
    KeyComboBinding(("/",), _search_forward),
    KeyComboBinding(("?",), _search_reverse),
    KeyComboBinding(("n",), _next_match),
    KeyComboBinding(("p",), _prev_match),
)


class DefaultInputClassifier:
    """Standard less-like key map; hosts may subclass and add bindings."""

    def __init__(self, *extra_bindings: KeyComboBinding) -> None:
        self.registry = KeyComboRegistry(normalize=key_token_name)
        self.registry.register_bindings(*DEFAULT_BINDINGS, *extra_bindings)

    def classify_input(self, key: str, state: PagerState) -> InputEvent | None:
        if not key:
            return None
        return self.registry.dispatch(key, state)


_DEFAULT_CLASSIFIER: DefaultInputClassifier | None = None


def classify_input(key: str, state: PagerState) -> InputEvent | None:
    """Classify ``key`` with the state's classifier, or the default key map."""
    classifier = state.input_classifier
    if classifier is None:
        global _DEFAULT_CLASSIFIER
        if _DEFAULT_CLASSIFIER is None:
            _DEFAULT_CLASSIFIER = DefaultInputClassifier()
        classifier = _DEFAULT_CLASSIFIER
    return classifier.classify_input(key, state)


__all__ = [
    "DEFAULT_BINDINGS",
    "DefaultInputClassifier",
    "MOUSE_SCROLL_LINES",
    "classify_input",
    "parse_key_args",
]
