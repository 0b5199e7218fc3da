"""Logging setup for livepager.

The pager owns the terminal while a session runs, so the package logger never
writes to stderr by default. A log file is opt-in through config or the
``LIVEPAGER_LOG`` environment variable.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOGGER_NAME = "livepager"
LOG_ENV_VAR = "LIVEPAGER_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def resolve_log_path(configured: Path | None = None) -> Path | None:
    """Return the log file path, preferring the environment over config."""
    env_value = os.environ.get(LOG_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    return configured


def setup_logging(path: Path | None, level: int = logging.DEBUG) -> logging.Handler | None:
    """Attach a file handler to the package logger; ``None`` path is a no-op.

    Calling it again with the same path does not add a second handler.
    """
    if path is None:
        return None
    resolved = str(Path(path).resolve())
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == resolved:
            return handler
    handler = logging.FileHandler(resolved, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


__all__ = ["LOG_ENV_VAR", "resolve_log_path", "setup_logging"]
