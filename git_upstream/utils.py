"""Shared utilities for git-upstream: logging setup and message formatting."""

from __future__ import annotations

import logging
import os
import shlex
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console
from rich.text import Text

PROJECT_NAME = "git-upstream"
LOGGER_NAME = "git_upstream"

LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# Records logged with ``extra={"style": ...}`` override the level colour.
COMMAND_STYLE = "bold underline"


class ConsoleHandler(logging.Handler):
    """Logging handler that renders records on a rich console (stderr by default)."""

    LEVEL_STYLES = {
        logging.DEBUG: "dim",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "bold red",
    }
    LEVEL_PREFIXES = {
        logging.WARNING: "WARN: ",
        logging.ERROR: "ERROR: ",
        logging.CRITICAL: "ERROR: ",
    }

    def __init__(self, console: Optional[Console] = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.console = console or Console(stderr=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.LEVEL_PREFIXES.get(record.levelno, "") + self.format(record)
            style = getattr(record, "style", None) or self.LEVEL_STYLES.get(record.levelno, "")
            self.console.print(Text(message, style=style), soft_wrap=True)
        except Exception:  # noqa: BLE001
            self.handleError(record)


def parse_log_level(value: str) -> int:
    """Translate a ``--log`` value such as ``debug`` or ``trace`` into a logging level.

    Examples:
        >>> parse_log_level("trace") == logging.DEBUG
        True
        >>> parse_log_level("WARNING") == logging.WARNING
        True
    """

    name = value.strip().lower()
    if name in LOG_LEVELS:
        return LOG_LEVELS[name]
    raise ValueError(f"unknown log level {value!r}; expected one of: {', '.join(LOG_LEVELS)}")


def setup_logger(
    level: str = "info",
    log_file: str | os.PathLike[str] | None = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Configure the package logger: console output at ``level``, optional DEBUG log file.

    Module loggers (``git_upstream.git_ops`` and friends) propagate here, so
    ``--log debug`` also shows every git command that runs.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = ConsoleHandler(console=console)
    console_handler.setLevel(parse_log_level(level))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)
        logger.debug(f"Log file: {log_path}")

    return logger


def format_bulleted_list(items: Iterable[str]) -> str:
    """Render items one per line with a bullet, for error and warning messages.

    Examples:
        >>> print(format_bulleted_list(["origin", "fork"]))
        • origin
        • fork
    """

    return "\n".join(f"• {item}" for item in items)


def format_command(args: Iterable[str]) -> str:
    """Render an argument vector as a copy-pasteable shell command line."""

    return shlex.join(list(args))


__all__ = [
    "COMMAND_STYLE",
    "ConsoleHandler",
    "LOGGER_NAME",
    "LOG_LEVELS",
    "PROJECT_NAME",
    "format_bulleted_list",
    "format_command",
    "parse_log_level",
    "setup_logger",
]
