"""Config – environment-driven settings."""
from quota_guard.config.errors import ConfigError, InvalidSettingError
from quota_guard.config.settings import EnvSettingsLoader, Settings

__all__ = ["ConfigError", "EnvSettingsLoader", "InvalidSettingError", "Settings"]
