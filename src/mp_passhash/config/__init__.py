"""Config – hashing limits and worker pool sizing."""

from mp_passhash.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from mp_passhash.config.settings import (
    EnvSettingsLoader,
    HashingSettings,
    Settings,
    SettingsLoader,
    get_settings,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "HashingSettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "get_settings",
]
