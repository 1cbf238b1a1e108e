"""Logging setup and utilities.

Every logger comes from `get_logger`, so that `init_logger` can switch the
handlers and the level of all of them at once, e.g. when `--debug` is parsed.
"""

import logging
import os

from .ansi import LogStyles, paint, wants_color

__all__ = [
    "LogObjects",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
]


class LogObjects:
    """Handlers and loggers shared by the whole package."""

    debug: bool = bool(os.environ.get("DEBUG"))
    handlers: list[logging.Handler] = []
    loggers: list[logging.Logger] = []


def is_debug() -> bool:
    """Return True when debug logging is enabled."""
    return LogObjects.debug


def set_debug(value: bool) -> None:
    """Enable or disable debug logging for loggers set up afterwards."""
    LogObjects.debug = value


class ScreenLogFormatter(logging.Formatter):
    """Console formatter, warnings and errors are colored when stderr accepts it."""

    STYLES = {
        logging.WARNING: LogStyles.WARNING,
        logging.ERROR: LogStyles.ERROR,
        logging.CRITICAL: LogStyles.CRITICAL,
    }

    def __init__(self) -> None:
        super().__init__(r"%(name)25s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s")
        self.colored = wants_color()

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if self.colored:
            return paint(text, self.STYLES.get(record.levelno, ()))
        return text


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Loggers created before this call get the new handlers too.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    for handler in LogObjects.handlers:
        for logger in LogObjects.loggers:
            logger.removeHandler(handler)
        handler.close()
    LogObjects.handlers.clear()

    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter())
    LogObjects.handlers.append(stream_handler)

    for logger in LogObjects.loggers:
        _setup(logger)


def _setup(logger: logging.Logger, level: int | None = None) -> None:
    """Apply level & handlers to a logger."""
    if level is None:
        level = logging.DEBUG if is_debug() else logging.WARNING
    logger.setLevel(level)
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)


def get_logger(name: str = "monpos", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name (str): logger's name
        level (int): logger's level (auto if not set)

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    _setup(logger, level)
    if logger not in LogObjects.loggers:
        LogObjects.loggers.append(logger)
    logger.info('Logger "%s" initialized', name)
    return logger
