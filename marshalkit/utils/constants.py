"""Constants for marshalkit.

This module defines shared constants used across the library.
"""

# Library metadata
APP_NAME = "marshalkit"
APP_VERSION = "1.0.0"

# Metadata groups
DEFAULT_GROUP = "default"

# Special format value: integer epoch seconds
UNIX_FORMAT = "unix"

# Default values
DEFAULT_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIME_FORMAT = "%H:%M:%S"
DEFAULT_RANGE_SEPARATOR = "..."

# Environment variable naming a settings file
CONFIG_ENV_VAR = "MARSHALKIT_CONFIG"

# Supported settings / snapshot formats
SUPPORTED_CONFIG_FORMATS = [".yaml", ".yml", ".json"]
SUPPORTED_SNAPSHOT_SUFFIXES = [".yaml", ".yml"]

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Many-row validation modes
VALIDATE_NO = "no"
VALIDATE_THROW = "throw"
VALIDATE_EXCLUDE = "exclude"
VALIDATE_INCLUDE = "include"
VALIDATION_MODES = (VALIDATE_NO, VALIDATE_THROW, VALIDATE_EXCLUDE, VALIDATE_INCLUDE)
