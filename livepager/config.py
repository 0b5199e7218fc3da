"""Persistent JSON config helpers.

Stores user defaults for new pager sessions: line-number policy, prompt text,
no-overflow behavior, and optional debug logging. All access is defensive:
malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .state import DEFAULT_PROMPT, LineNumbers

APP_NAME = "livepager"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class PagerConfig:
    """Validated session defaults; host events sent before paging override them."""

    line_numbers: LineNumbers = LineNumbers.NO
    prompt: str = DEFAULT_PROMPT
    run_no_overflow: bool = False
    log_file: Path | None = None
    log_level: int = logging.DEBUG


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored; an unwritable config never
    stops a session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        pass


def _coerce_line_numbers(value: object) -> LineNumbers:
    if not isinstance(value, str):
        return LineNumbers.NO
    try:
        return LineNumbers(value.strip().lower())
    except ValueError:
        return LineNumbers.NO


def _coerce_prompt(value: object) -> str:
    if not isinstance(value, str):
        return DEFAULT_PROMPT
    stripped = value.strip()
    return stripped if stripped else DEFAULT_PROMPT


def _coerce_log_file(value: object) -> Path | None:
    if not isinstance(value, str) or not value.strip():
        return None
    return Path(value.strip()).expanduser()


def _coerce_log_level(value: object) -> int:
    if isinstance(value, str) and value.strip().upper() in _LOG_LEVELS:
        return getattr(logging, value.strip().upper())
    return logging.DEBUG


def load_pager_config() -> PagerConfig:
    """Return session defaults read from the config file.

    Unknown keys are ignored; each invalid value falls back to its default
    independently of the others.
    """
    data = load_config()
    run_no_overflow = data.get("run_no_overflow")
    return PagerConfig(
        line_numbers=_coerce_line_numbers(data.get("line_numbers")),
        prompt=_coerce_prompt(data.get("prompt")),
        run_no_overflow=run_no_overflow if isinstance(run_no_overflow, bool) else False,
        log_file=_coerce_log_file(data.get("log_file")),
        log_level=_coerce_log_level(data.get("log_level")),
    )


__all__ = [
    "CONFIG_PATH",
    "PagerConfig",
    "load_config",
    "load_pager_config",
    "save_config",
]
