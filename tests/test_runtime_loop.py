"""Tests for the reactor loop's redraw strategy and mode handling."""

from __future__ import annotations

import io
import threading
import unittest

from livepager.channel import EventChannel
from livepager.display import prompt_row_text
from livepager.errors import SessionIOError
from livepager.events import AppendData, SendMessage, SetData, SetPrompt, UserInput
from livepager.input.events import Exit, UpdateUpperMark
from livepager.runtime.loop import ReactorTiming, RunMode, append_data, run_reactor
from livepager.state import LineNumbers, PagerState
from livepager.terminal import CLEAR_SCREEN, cursor_to

_TIMING = ReactorTiming(idle_seconds=0.001)


class _BrokenOutput:
    def write(self, _text: str) -> int:
        raise OSError("broken pipe")

    def flush(self) -> None:
        pass


def _run(state: PagerState, events, run_mode: RunMode) -> str:
    channel = EventChannel()
    for event in events:
        channel.send(event)
    out = io.StringIO()
    run_reactor(channel, state, out, run_mode, timing=_TIMING)
    return out.getvalue()


class AppendFastPathTests(unittest.TestCase):
    def test_writes_only_rows_that_fit_above_the_held_back_row(self) -> None:
        state = PagerState(rows=5, cols=20)
        state.append_str("x\ny\nz")
        out = io.StringIO()

        written = append_data(out, state, "a\nb\nc\n")

        self.assertEqual(written, 1)
        self.assertEqual(out.getvalue(), cursor_to(0, 3) + "a")
        self.assertEqual(state.formatted_lines, ["x", "y", "z", "a", "b", "c"])

    def test_four_rows_onto_three_write_one_and_store_all(self) -> None:
        state = PagerState(rows=5, cols=20)
        state.append_str("x\ny\nz")
        out = io.StringIO()

        written = append_data(out, state, "a\nb\nc\nd")

        self.assertEqual(written, 1)
        self.assertEqual(out.getvalue(), cursor_to(0, 3) + "a")
        self.assertEqual(state.formatted_lines[3:], ["a", "b", "c", "d"])
        self.assertEqual(state.num_lines(), 7)

    def test_numbered_rows_use_the_grown_count(self) -> None:
        state = PagerState(rows=5, cols=20, line_numbers=LineNumbers.ENABLED)
        state.append_str("a")
        out = io.StringIO()

        written = append_data(out, state, "b")

        self.assertEqual(written, 1)
        self.assertEqual(out.getvalue(), cursor_to(0, 1) + "2. b")

    def test_wider_gutter_repaints_everything(self) -> None:
        state = PagerState(rows=20, cols=20, line_numbers=LineNumbers.ENABLED)
        state.set_text("\n".join(f"r{idx}" for idx in range(8)))
        out = io.StringIO()

        written = append_data(out, state, "a\nb")

        self.assertEqual(written, 0)
        self.assertTrue(out.getvalue().startswith(CLEAR_SCREEN))
        self.assertIn(cursor_to(0, 0) + " 1. r0", out.getvalue())
        self.assertIn(cursor_to(0, 9) + "10. b", out.getvalue())

    def test_full_screen_appends_store_without_writing(self) -> None:
        state = PagerState(rows=3, cols=20)
        state.append_str("1\n2\n3\n4")
        out = io.StringIO()

        written = append_data(out, state, "5\n6")

        self.assertEqual(written, 0)
        self.assertEqual(out.getvalue(), "")
        self.assertEqual(state.num_lines(), 6)

    def test_empty_screen_writes_from_the_top(self) -> None:
        state = PagerState(rows=5, cols=20)
        out = io.StringIO()

        written = append_data(out, state, "a\nb")

        self.assertEqual(written, 2)
        self.assertEqual(out.getvalue(), cursor_to(0, 0) + "a\r\nb")


class DynamicModeTests(unittest.TestCase):
    def test_initial_draw_then_exit(self) -> None:
        state = PagerState(rows=5, cols=20)
        output = _run(state, [UserInput(Exit())], RunMode.DYNAMIC)
        self.assertTrue(output.startswith(CLEAR_SCREEN))
        self.assertTrue(state.is_exited)

    def test_prompt_changes_rewrite_only_the_prompt_row(self) -> None:
        state = PagerState(rows=5, cols=20)
        output = _run(state, [SetPrompt("hello"), UserInput(Exit())], RunMode.DYNAMIC)

        self.assertEqual(state.prompt, "hello")
        self.assertEqual(output.count(CLEAR_SCREEN), 1)
        self.assertIn(cursor_to(0, 5) + prompt_row_text("hello", 20), output)

    def test_message_is_shown_in_prompt_row(self) -> None:
        state = PagerState(rows=5, cols=20)
        output = _run(state, [SendMessage("done"), UserInput(Exit())], RunMode.DYNAMIC)

        self.assertEqual(state.message, "done")
        self.assertTrue(output.endswith(cursor_to(0, 5) + prompt_row_text("done", 20)))

    def test_content_replacement_forces_full_redraw(self) -> None:
        state = PagerState(rows=5, cols=20)
        output = _run(state, [SetData("fresh"), UserInput(Exit())], RunMode.DYNAMIC)

        self.assertEqual(state.formatted_lines, ["fresh"])
        self.assertEqual(output.count(CLEAR_SCREEN), 2)

    def test_scroll_input_is_applied_and_redrawn(self) -> None:
        state = PagerState(rows=2, cols=20)
        state.set_text("a\nb\nc\nd")
        _run(state, [UserInput(UpdateUpperMark(1)), UserInput(Exit())], RunMode.DYNAMIC)
        self.assertEqual(state.upper_mark, 1)

    def test_appends_from_another_thread_arrive_in_order(self) -> None:
        state = PagerState(rows=5, cols=20)
        channel = EventChannel()

        def produce() -> None:
            for idx in range(50):
                channel.send(AppendData(f"{idx}\n"))
            channel.send(UserInput(Exit()))

        producer = threading.Thread(target=produce)
        producer.start()
        run_reactor(channel, state, io.StringIO(), RunMode.DYNAMIC, timing=_TIMING)
        producer.join(1.0)

        self.assertEqual(state.lines, [str(idx) for idx in range(50)])

    def test_exit_runs_callbacks(self) -> None:
        calls: list[str] = []
        state = PagerState(rows=5, cols=20)
        state.exit_callbacks.append(lambda: calls.append("done"))
        _run(state, [UserInput(Exit())], RunMode.DYNAMIC)
        self.assertEqual(calls, ["done"])

    def test_write_failure_becomes_session_error(self) -> None:
        state = PagerState(rows=5, cols=20)
        with self.assertRaises(SessionIOError) as ctx:
            run_reactor(EventChannel(), state, _BrokenOutput(), RunMode.DYNAMIC, timing=_TIMING)
        self.assertIsInstance(ctx.exception.__cause__, OSError)


class StaticModeTests(unittest.TestCase):
    def test_only_user_input_is_processed(self) -> None:
        state = PagerState(rows=5, cols=20)
        state.set_text("kept")
        _run(
            state,
            [AppendData("dropped"), SetPrompt("ignored"), UserInput(Exit())],
            RunMode.STATIC,
        )

        self.assertEqual(state.lines, ["kept"])
        self.assertNotEqual(state.prompt, "ignored")
        self.assertTrue(state.is_exited)

    def test_each_input_is_redrawn(self) -> None:
        state = PagerState(rows=2, cols=20)
        state.set_text("a\nb\nc\nd")
        output = _run(
            state,
            [UserInput(UpdateUpperMark(1)), UserInput(UpdateUpperMark(2)), UserInput(Exit())],
            RunMode.STATIC,
        )
        self.assertEqual(output.count(CLEAR_SCREEN), 3)
        self.assertEqual(state.upper_mark, 2)


if __name__ == "__main__":
    unittest.main()
