"""Engine configuration.

This module exposes the settings model and helpers to load and swap it.
"""

from .settings import (
    EngineSettings,
    SettingsError,
    configure,
    get_settings,
    load_settings,
    on_settings_change,
    reset_settings,
    validate_settings,
)

__all__ = [
    "EngineSettings",
    "SettingsError",
    "configure",
    "get_settings",
    "load_settings",
    "on_settings_change",
    "reset_settings",
    "validate_settings",
]
