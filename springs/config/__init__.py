"""config — solver settings public API."""

from springs.config.settings import DEFAULT_SETTINGS_PATH, Settings, get_settings, load_settings

__all__ = ["DEFAULT_SETTINGS_PATH", "Settings", "get_settings", "load_settings"]
