"""Shared utilities for marshalkit.

This module provides common utilities used across the library.
"""

from .constants import (
    APP_NAME,
    APP_VERSION,
    CONFIG_ENV_VAR,
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATETIME_FORMAT,
    DEFAULT_GROUP,
    DEFAULT_RANGE_SEPARATOR,
    DEFAULT_TIME_FORMAT,
    SUPPORTED_CONFIG_FORMATS,
    SUPPORTED_SNAPSHOT_SUFFIXES,
    UNIX_FORMAT,
    VALIDATE_EXCLUDE,
    VALIDATE_INCLUDE,
    VALIDATE_NO,
    VALIDATE_THROW,
    VALIDATION_MODES,
)
from .display import describe_value, to_json_text
from .logging import get_logger, setup_logging

__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "CONFIG_ENV_VAR",
    "DEFAULT_DATE_FORMAT",
    "DEFAULT_DATETIME_FORMAT",
    "DEFAULT_GROUP",
    "DEFAULT_RANGE_SEPARATOR",
    "DEFAULT_TIME_FORMAT",
    "SUPPORTED_CONFIG_FORMATS",
    "SUPPORTED_SNAPSHOT_SUFFIXES",
    "UNIX_FORMAT",
    "VALIDATE_EXCLUDE",
    "VALIDATE_INCLUDE",
    "VALIDATE_NO",
    "VALIDATE_THROW",
    "VALIDATION_MODES",
    "describe_value",
    "get_logger",
    "setup_logging",
    "to_json_text",
]
