"""Config errors – raised while reading or validating ``QUOTA_*`` settings."""
from __future__ import annotations

from quota_guard.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded; the service must not start."""
    default_code = "config_error"

    def __init__(self, message: str, *, setting: str | None = None) -> None:
        super().__init__(message, detail={"setting": setting} if setting else None)
        self.setting = setting


class InvalidSettingError(ConfigError):
    """A setting is present but unusable (bad type, out of range, unknown choice)."""
    default_code = "invalid_setting"

    def __init__(self, setting: str, value: object, reason: str) -> None:
        super().__init__(f"{setting}={value!r}: {reason}", setting=setting)
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingError"]
