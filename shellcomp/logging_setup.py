"""Logging setup and utilities.

Debug mode (the DEBUG environment variable or `--debug`) lowers the level of
every logger to DEBUG and adds the logger name and source line to screen
messages.
"""

import logging
import os

from .ansi import LEVEL_STYLES, colorize, should_colorize

__all__ = [
    "LogObjects",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
]


class LogObjects:
    """Reusable objects for loggers."""

    debug: bool = bool(os.environ.get("DEBUG"))
    handlers: list[logging.Handler] = []


def is_debug() -> bool:
    """Return the current debug state."""
    return LogObjects.debug


def set_debug(value: bool) -> None:
    """Set the debug state (applies to loggers returned afterwards)."""
    LogObjects.debug = value


class ScreenLogFormatter(logging.Formatter):
    """Colors records by level, when the terminal allows it."""

    def __init__(self) -> None:
        super().__init__()
        log_format = r"%(name)20s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        color = should_colorize()
        self._formatters = {
            level: logging.Formatter(colorize(log_format, *LEVEL_STYLES.get(level, ())) if color else log_format)
            for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL)
        }

    def format(self, record: logging.LogRecord) -> str:
        formatter = self._formatters.get(record.levelno) or self._formatters[logging.INFO]
        return formatter.format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    for handler in LogObjects.handlers:
        handler.close()
    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter())
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "shellcomp", level: int | None = None) -> logging.Logger:
    """Return a named logger wired to the current handlers.

    Args:
        name (str): logger's name
        level (int): logger's level (auto if not set)
    """
    logger = logging.getLogger(name)
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    else:
        logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()
    for handler in LogObjects.handlers:
        logger.addHandler(handler)
    logger.debug('Logger "%s" initialized', name)
    return logger
