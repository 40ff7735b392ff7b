"""Engine settings for marshalkit.

Settings are a frozen pydantic model. They can be loaded from a YAML or
JSON file, from the file named by the MARSHALKIT_CONFIG environment
variable, or overridden in code with configure().
"""

import json
import os
import pathlib
from typing import Callable, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import MarshalError
from ..utils import (
    CONFIG_ENV_VAR,
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATETIME_FORMAT,
    DEFAULT_RANGE_SEPARATOR,
    DEFAULT_TIME_FORMAT,
    SUPPORTED_CONFIG_FORMATS,
    get_logger,
)

logger = get_logger(__name__)


class SettingsError(MarshalError):
    """Raised when settings cannot be loaded or validated."""

    pass


class EngineSettings(BaseModel):
    """Process-wide engine settings.

    Immutable once created; use configure() to swap the active settings.
    """

    datetime_format: str = Field(
        default=DEFAULT_DATETIME_FORMAT,
        description="Default strftime pattern for datetime values",
    )
    date_format: str = Field(
        default=DEFAULT_DATE_FORMAT, description="Default strftime pattern for date values"
    )
    time_format: str = Field(
        default=DEFAULT_TIME_FORMAT, description="Default strftime pattern for time values"
    )
    range_separator: str = Field(
        default=DEFAULT_RANGE_SEPARATOR, description="Separator used by range types"
    )
    cache_record_types: bool = Field(
        default=True, description="Cache record types and resolved metadata groups"
    )
    detect_alias_collisions: bool = Field(
        default=True, description="Reject two fields sharing one alias within a group"
    )

    @field_validator("datetime_format", "date_format", "time_format", "range_separator")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty patterns and separators."""
        if not v or not v.strip():
            raise ValueError("value cannot be empty")
        return v

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


_active: Optional[EngineSettings] = None
_reset_hooks: list[Callable[[], None]] = []


def load_settings(path: Union[str, pathlib.Path]) -> EngineSettings:
    """Load settings from a YAML or JSON file.

    Args:
        path: Path to settings file

    Returns:
        Validated EngineSettings instance

    Raises:
        SettingsError: If the file cannot be read, parsed or validated
    """
    path = pathlib.Path(path)
    if not path.is_file():
        raise SettingsError(f"Settings file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_CONFIG_FORMATS:
        raise SettingsError(
            f"Unsupported file format: {path.suffix}. "
            f"Supported formats: {', '.join(SUPPORTED_CONFIG_FORMATS)}"
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                raw = json.load(f)
            else:
                raw = yaml.safe_load(f)
    except OSError as e:
        raise SettingsError(f"Failed to read settings file {path}: I/O error: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML syntax in {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SettingsError(f"Invalid JSON syntax in {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise SettingsError(f"Settings must be a dictionary, got {type(raw).__name__}")

    return validate_settings(raw)


def validate_settings(raw: dict) -> EngineSettings:
    """Validate a settings dictionary.

    Args:
        raw: Settings dictionary

    Returns:
        Validated EngineSettings instance

    Raises:
        SettingsError: If validation fails
    """
    try:
        return EngineSettings(**raw)
    except Exception as e:
        raise SettingsError(f"Settings validation failed:\n{_format_validation_error(e)}") from e


def _format_validation_error(error: Exception) -> str:
    if hasattr(error, "errors"):
        errors = []
        for err in error.errors():
            field_path = " -> ".join(str(loc) for loc in err.get("loc", []))
            errors.append(f"  {field_path}: {err.get('msg', 'Validation error')} ({err.get('type', 'unknown')})")
        return "\n".join(errors)
    return str(error)


def get_settings() -> EngineSettings:
    """Return the active settings, loading them on first use.

    The file named by MARSHALKIT_CONFIG is used when set, otherwise
    defaults apply.
    """
    global _active
    if _active is None:
        config_path = os.environ.get(CONFIG_ENV_VAR)
        if config_path:
            logger.info(f"Loading settings from {config_path}")
            _active = load_settings(config_path)
        else:
            _active = EngineSettings()
    return _active


def configure(settings: Optional[EngineSettings] = None, **overrides) -> EngineSettings:
    """Replace the active settings.

    Args:
        settings: New settings; the current ones are used as a base if None
        **overrides: Individual fields to override

    Returns:
        The newly active settings
    """
    global _active
    base = settings if settings is not None else get_settings()
    if overrides:
        base = validate_settings({**base.model_dump(), **overrides})
    _active = base
    for hook in _reset_hooks:
        hook()
    logger.debug(f"Settings configured: {_active.model_dump()}")
    return _active


def reset_settings() -> None:
    """Drop the active settings so the next get_settings() reloads them."""
    global _active
    _active = None
    for hook in _reset_hooks:
        hook()


def on_settings_change(hook: Callable[[], None]) -> Callable[[], None]:
    """Register a callback run whenever settings change (used to drop caches)."""
    _reset_hooks.append(hook)
    return hook
