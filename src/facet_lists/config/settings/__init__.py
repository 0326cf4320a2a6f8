"""Config settings – 12-factor env-based configuration."""
from facet_lists.config.settings.base import Settings
from facet_lists.config.settings.list_pages import ListPagesSettings
from facet_lists.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "ListPagesSettings", "Settings", "SettingsLoader"]
