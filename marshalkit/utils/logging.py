"""Logging utilities for marshalkit.

Every module logs through `get_logger(__name__)`. As a library,
marshalkit leaves the root logger alone: its package logger carries a
NullHandler until the application calls setup_logging().
"""

import logging
import sys
from typing import Optional, TextIO

from .constants import APP_NAME, LOG_DATE_FORMAT, LOG_FORMAT

logging.getLogger(APP_NAME).addHandler(logging.NullHandler())


def setup_logging(
    verbose: bool = False,
    level: Optional[int] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a formatted stream handler to the marshalkit logger.

    Calling it again replaces the handler instead of adding another one.

    Args:
        verbose: If True, set log level to DEBUG, otherwise INFO
        level: Optional explicit log level (overrides verbose)
        stream: Target stream, stderr when None

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(APP_NAME)
    for handler in list(package_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)

    if level is not None:
        log_level = level
    else:
        log_level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
