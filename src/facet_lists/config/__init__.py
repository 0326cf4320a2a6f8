"""Config – 12-factor settings and loaders."""

from facet_lists.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    ListPagesSettings,
    Settings,
    SettingsLoader,
)
from facet_lists.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "ListPagesSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
