"""Centralized logging configuration.

All modules should use ``get_logger(__name__)`` to obtain a logger instance.
The level comes from the EXPENSETRACK_LOG_LEVEL environment variable
(default WARNING) and can be raised from the command line.
"""

import logging
import os
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_ROOT_NAME = "expensetrack"
_initialized = False


def _init_logging() -> None:
    """Configure the package logger once."""
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger(_ROOT_NAME)
    level_name = os.environ.get("EXPENSETRACK_LOG_LEVEL", "WARNING").upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))
    root.addHandler(handler)
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    _init_logging()
    return logging.getLogger(name)


def set_level(level: int) -> None:
    """Override the package log level (used by ``--verbose``)."""
    _init_logging()
    logging.getLogger(_ROOT_NAME).setLevel(level)
