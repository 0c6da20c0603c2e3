"""Logging setup for the ``elevator`` command and embedding applications."""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.logging import RichHandler

from .config import get_settings

LOG_FILE_MAX_BYTES = 5_000_000
LOG_FILE_BACKUPS = 5
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _file_handler(log_file: str) -> logging.Handler:
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def build_handlers(log_file: str | None) -> list[logging.Handler]:
    """Console handler first, then the rotating file handler when *log_file* is set."""

    handlers: list[logging.Handler] = [
        RichHandler(rich_tracebacks=True, markup=False, show_path=False)
    ]
    if log_file:
        handlers.append(_file_handler(log_file))
    return handlers


def setup_logging(level: int | None = None, log_file: str | None = None) -> None:
    """Route log records to the terminal and optionally a file.

    ``level`` and ``log_file`` fall back to ``ELEVATOR_LOG_LEVEL`` and
    ``ELEVATOR_LOG_FILE``. Existing root handlers are replaced.
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level_value if level is None else level,
        handlers=build_handlers(log_file if log_file is not None else settings.log_file),
        format="%(message)s",
        force=True,
    )


__all__ = ["build_handlers", "setup_logging"]
