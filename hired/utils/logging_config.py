"""Logging configuration for hired.

The animation owns stdout, so every handler writes to stderr or to a file.
Console output goes through a Rich handler; the optional log file gets a
plain formatter with Rich markup stripped.
"""

from __future__ import annotations

import logging
import logging.config
import re
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "hired"


def strip_rich_markup(text: str) -> str:
    """Strip Rich markup tags like [red] or [/bold] from text."""
    return re.sub(r"\[/?[a-z_#][^\]]*\]", "", text)


class FileFormatter(logging.Formatter):
    """Formatter for file output that strips Rich markup."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, stripping Rich markup for file output."""
        return strip_rich_markup(super().format(record))


def create_rich_handler(
    console: Console | None = None,
    level: int = logging.WARNING,
    rich_tracebacks: bool = False,
) -> logging.Handler:
    """Create a RichHandler bound to a stderr console.

    Args:
        console: Optional Rich Console instance (defaults to stderr)
        level: Log level
        rich_tracebacks: Whether to render exceptions with Rich tracebacks

    Returns:
        Configured RichHandler instance

    """
    if console is None:
        console = Console(file=sys.stderr, stderr=True, markup=True)

    return RichHandler(
        console=console,
        level=level,
        show_path=False,
        markup=True,
        rich_tracebacks=rich_tracebacks,
    )


def setup_logging(
    level: int | str = logging.WARNING,
    log_file: str | Path | None = None,
    console: Console | None = None,
    rich_tracebacks: bool = False,
) -> None:
    """Set up logging for the ``hired`` logger tree.

    Args:
        level: Log level for console output (name or number)
        log_file: Optional path to an additional plain-text log file
        console: Optional Rich Console for the console handler
        rich_tracebacks: Render exceptions with Rich tracebacks

    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "()": FileFormatter,
                "format": "%(asctime)s %(levelname)s %(name)s.%(funcName)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {},
        "loggers": {
            _ROOT_LOGGER: {
                "level": level,
                "handlers": [],
                "propagate": False,
            },
        },
    }

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logging_config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "level": logging.DEBUG,
            "formatter": "simple",
            "filename": str(log_path),
            "encoding": "utf-8",
        }
        logging_config["loggers"][_ROOT_LOGGER]["handlers"].append("file")
        # the file records everything; the console handler filters on its own level
        logging_config["loggers"][_ROOT_LOGGER]["level"] = logging.DEBUG

    logging.config.dictConfig(logging_config)

    rich_handler = create_rich_handler(
        console=console,
        level=level,
        rich_tracebacks=rich_tracebacks,
    )
    logging.getLogger(_ROOT_LOGGER).addHandler(rich_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    if name == _ROOT_LOGGER or name.startswith(f"{_ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")
