"""Command-line front door for livepager.

Pages a file or standard input. ``--follow`` keeps the view live while input
is still arriving, the way ``tail -f`` output is usually read.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from .config import load_config, save_config
from .errors import ChannelDisconnected, PagerError
from .pager import Pager
from .runtime.app import dynamic_paging, page_all
from .state import LineNumbers

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read ``path`` trying common encodings before falling back to replacement."""
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_text(encoding="utf-8", errors="replace")


def stream_lines(pager: Pager, lines: Iterable[str]) -> int:
    """Push ``lines`` into ``pager`` until exhausted or the session ends.

    Returns the number of lines delivered.
    """
    delivered = 0
    try:
        for line in lines:
            pager.push_str(line)
            delivered += 1
    except ChannelDisconnected:
        logger.debug("session ended after %d streamed lines", delivered)
    return delivered


def _start_streaming(pager: Pager, source: TextIO) -> threading.Thread:
    thread = threading.Thread(
        target=stream_lines,
        args=(pager, source),
        name="livepager-stdin-feeder",
        daemon=True,
    )
    thread.start()
    return thread


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="livepager",
        description="Page a file or standard input in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="File to page. Defaults to standard input.")
    parser.add_argument(
        "--follow",
        "-f",
        action="store_true",
        help="Keep paging while input is still being written.",
    )
    parser.add_argument("--line-numbers", "-N", action="store_true", help="Show line numbers.")
    parser.add_argument("--prompt", default=None, help="Text shown in the prompt row.")
    parser.add_argument(
        "--no-overflow",
        action="store_true",
        help="Print directly instead of paging when the content fits on one screen.",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store --line-numbers, --prompt and --no-overflow as defaults for later sessions.",
    )
    return parser


def save_defaults(args: argparse.Namespace) -> None:
    """Merge the display options given on the command line into the config file."""
    config = load_config()
    config["line_numbers"] = LineNumbers.YES.value if args.line_numbers else LineNumbers.NO.value
    config["run_no_overflow"] = bool(args.no_overflow)
    if args.prompt:
        config["prompt"] = args.prompt
    save_config(config)


def configure_pager(pager: Pager, args: argparse.Namespace, path: Path | None) -> None:
    """Send the option events for ``args`` ahead of any content."""
    if args.line_numbers:
        pager.set_line_numbers(LineNumbers.YES)
    if args.no_overflow:
        pager.set_run_no_overflow(True)
    if args.prompt is not None:
        pager.set_prompt(args.prompt)
    elif path is not None:
        pager.set_prompt(str(path))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and page the requested input."""
    args = build_parser().parse_args(argv)
    if args.save_defaults:
        save_defaults(args)

    path = Path(args.path) if args.path is not None else None
    if path is not None and not path.is_file():
        raise SystemExit(f"Path not found: {path}")

    pager = Pager()
    configure_pager(pager, args, path)
    try:
        if args.follow:
            if path is None:
                _start_streaming(pager, sys.stdin)
                dynamic_paging(pager)
            else:
                with path.open(encoding="utf-8", errors="replace") as handle:
                    _start_streaming(pager, handle)
                    dynamic_paging(pager)
            return
        pager.set_text(read_text(path) if path is not None else sys.stdin.read())
        page_all(pager)
    except PagerError as exc:
        raise SystemExit(f"livepager: {exc}") from exc


if __name__ == "__main__":
    main()
