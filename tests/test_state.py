"""Tests for ``PagerState`` geometry, appends, and viewport clamping."""

from __future__ import annotations

import unittest

from livepager.state import (
    USIZE_MAX,
    LineNumbers,
    PagerState,
    saturating_add,
    saturating_sub,
)


def _numbered_state(count: int, rows: int = 5, cols: int = 20) -> PagerState:
    state = PagerState(rows=rows, cols=cols)
    state.set_text("\n".join(f"line {idx}" for idx in range(count)))
    return state


class SaturatingArithmeticTests(unittest.TestCase):
    def test_subtraction_stops_at_zero(self) -> None:
        self.assertEqual(saturating_sub(0, 1), 0)
        self.assertEqual(saturating_sub(3, 10), 0)
        self.assertEqual(saturating_sub(10, 3), 7)

    def test_addition_stops_at_usize_max(self) -> None:
        self.assertEqual(saturating_add(USIZE_MAX, 1), USIZE_MAX)
        self.assertEqual(saturating_add(USIZE_MAX - 1, 1), USIZE_MAX)
        self.assertEqual(saturating_add(1, 2), 3)


class LineNumbersTests(unittest.TestCase):
    def test_user_modes_flip(self) -> None:
        self.assertIs(~LineNumbers.YES, LineNumbers.NO)
        self.assertIs(~LineNumbers.NO, LineNumbers.YES)

    def test_host_fixed_modes_do_not_flip(self) -> None:
        self.assertIs(~LineNumbers.ENABLED, LineNumbers.ENABLED)
        self.assertIs(~LineNumbers.DISABLED, LineNumbers.DISABLED)

    def test_is_on(self) -> None:
        self.assertTrue(LineNumbers.ENABLED.is_on())
        self.assertTrue(LineNumbers.YES.is_on())
        self.assertFalse(LineNumbers.NO.is_on())
        self.assertFalse(LineNumbers.DISABLED.is_on())


class PagerStateTests(unittest.TestCase):
    def test_for_terminal_reserves_prompt_row(self) -> None:
        state = PagerState.for_terminal(80, 24)
        self.assertEqual((state.cols, state.rows), (80, 23))
        self.assertEqual(PagerState.for_terminal(0, 1).rows, 1)

    def test_set_upper_mark_clamps_to_last_full_screen(self) -> None:
        state = _numbered_state(30, rows=10)
        state.set_upper_mark(100)
        self.assertEqual(state.upper_mark, 20)
        self.assertEqual(state.visible_line_count(), 10)

    def test_set_upper_mark_pins_short_content_to_top(self) -> None:
        state = _numbered_state(4, rows=10)
        state.set_upper_mark(3)
        self.assertEqual(state.upper_mark, 0)
        self.assertEqual(state.visible_line_count(), 4)

    def test_append_str_returns_wrapped_rows(self) -> None:
        state = PagerState(rows=5, cols=4)
        new_rows = state.append_str("abcdefgh\nxy")
        self.assertEqual(new_rows, ["abcd", "efgh", "xy"])
        self.assertEqual(state.lines, ["abcdefgh", "xy"])
        self.assertEqual(state.formatted_lines, ["abcd", "efgh", "xy"])

    def test_append_keeps_empty_lines(self) -> None:
        state = PagerState(rows=5, cols=10)
        state.append_str("a\n\nb\n")
        self.assertEqual(state.formatted_lines, ["a", "", "b"])

    def test_make_append_lines_does_not_store(self) -> None:
        state = PagerState(rows=5, cols=10)
        self.assertEqual(state.make_append_lines("x\ny"), ["x", "y"])
        self.assertEqual(state.num_lines(), 0)

    def test_set_text_replaces_content_and_resets_viewport(self) -> None:
        state = _numbered_state(30, rows=5)
        state.set_upper_mark(12)
        state.set_text("only")
        self.assertEqual(state.formatted_lines, ["only"])
        self.assertEqual(state.upper_mark, 0)

    def test_resize_rewraps_on_width_change(self) -> None:
        state = PagerState(rows=5, cols=10)
        state.set_text("abcdefgh")
        state.resize(4, 13)
        self.assertEqual(state.rows, 12)
        self.assertEqual(state.formatted_lines, ["abcd", "efgh"])

    def test_resize_reclamps_viewport(self) -> None:
        state = _numbered_state(30, rows=5)
        state.set_upper_mark(25)
        state.resize(20, 21)
        self.assertEqual(state.upper_mark, 10)

    def test_line_number_gutter_narrows_wrap_width(self) -> None:
        state = PagerState(rows=5, cols=10, line_numbers=LineNumbers.YES)
        state.append_str("abcdefghij")
        self.assertEqual(state.gutter_width(), 3)
        self.assertEqual(state.formatted_lines, ["abcdefg", "hij"])

    def test_gutter_growth_rewraps_existing_rows(self) -> None:
        state = PagerState(rows=5, cols=6, line_numbers=LineNumbers.YES)
        state.set_text("\n".join(["abc"] * 9))
        self.assertEqual(state.formatted_lines, ["abc"] * 9)

        stored = state.append_formatted("wxyz", state.make_append_lines("wxyz"))

        self.assertFalse(stored)
        self.assertEqual(state.formatted_lines, ["ab", "c"] * 9 + ["wx", "yz"])
        self.assertEqual(state.gutter_width(), 4)

    def test_toggling_line_numbers_rewraps(self) -> None:
        state = PagerState(rows=5, cols=10)
        state.set_text("abcdefghij")
        state.set_line_numbers(LineNumbers.YES)
        self.assertEqual(state.formatted_lines, ["abcdefg", "hij"])
        state.set_line_numbers(LineNumbers.DISABLED)
        self.assertEqual(state.formatted_lines, ["abcdefghij"])

    def test_append_extends_search_index(self) -> None:
        state = PagerState(rows=5, cols=20)
        state.set_text("foo\nbar")
        state.search_term = "foo"
        state.search_idx = [0]
        state.append_str("xx\nFOOD")
        self.assertEqual(state.search_idx, [0, 3])

    def test_prefix_count_defaults_to_one(self) -> None:
        state = PagerState()
        self.assertEqual(state.prefix_count(), 1)
        state.prefix_num = "12"
        self.assertEqual(state.prefix_count(), 12)

    def test_message_replaces_prompt_until_restored(self) -> None:
        state = PagerState(prompt="log")
        state.send_message("hello")
        self.assertEqual(state.prompt_text(), "hello")
        state.restore_prompt()
        self.assertEqual(state.prompt_text(), "log")

    def test_exit_sets_flag(self) -> None:
        state = PagerState()
        self.assertFalse(state.is_exited)
        state.exit()
        self.assertTrue(state.is_exited)


if __name__ == "__main__":
    unittest.main()
