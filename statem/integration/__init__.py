"""
Configuration and reporting layer
"""

from .settings import (
    SettingsError,
    StatemSettings,
    configure_logging,
    load_settings,
    settings_from_env,
)

__all__ = [
    "SettingsError",
    "StatemSettings",
    "configure_logging",
    "load_settings",
    "settings_from_env",
]
