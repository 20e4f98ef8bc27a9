"""Config – QuotaSettings, the service's environment-driven configuration."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from quota_guard.application.quota.limits import (
    DEFAULT_BASE_LIMITS,
    DEFAULT_REMAINING_ON_FAILURE,
    DEFAULT_SUSPICIOUS_LIMITS,
    ActionType,
    LimitPolicy,
)
from quota_guard.config.errors import InvalidSettingError
from quota_guard.config.settings import EnvSettingsLoader, Settings

STORE_BACKENDS = ("memory", "file", "redis")


@dataclasses.dataclass
class QuotaSettings(Settings):
    """All knobs read from ``QUOTA_*`` environment variables."""

    _prefix: ClassVar[str] = "QUOTA"

    comments_limit: int = DEFAULT_BASE_LIMITS[ActionType.COMMENTS]
    posts_limit: int = DEFAULT_BASE_LIMITS[ActionType.POSTS]
    suspicious_comments_limit: int = DEFAULT_SUSPICIOUS_LIMITS[ActionType.COMMENTS]
    suspicious_posts_limit: int = DEFAULT_SUSPICIOUS_LIMITS[ActionType.POSTS]

    suspicion_threshold: int = 3
    suspicion_retention_seconds: int = 7 * 24 * 3600
    digest_length: int = 16

    store_backend: str = "memory"
    store_path: str = "quota-store.json"
    redis_url: str = "redis://localhost:6379/0"
    store_timeout_seconds: float = 0.5
    counter_retention_seconds: int = 24 * 3600
    sweep_interval_seconds: int = 300

    default_remaining_on_failure: int = DEFAULT_REMAINING_ON_FAILURE

    endpoint_path: str = "/api/daily-limit"
    cors_origins: list[str] = dataclasses.field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    def _validate(self) -> None:
        if self.store_backend not in STORE_BACKENDS:
            raise InvalidSettingError(
                "store_backend", self.store_backend, f"expected one of {', '.join(STORE_BACKENDS)}"
            )
        for name in (
            "comments_limit",
            "posts_limit",
            "suspicious_comments_limit",
            "suspicious_posts_limit",
            "suspicion_threshold",
            "default_remaining_on_failure",
            "counter_retention_seconds",
        ):
            if getattr(self, name) < 0:
                raise InvalidSettingError(name, getattr(self, name), "must be >= 0")
        if self.suspicious_comments_limit > self.comments_limit:
            raise InvalidSettingError(
                "suspicious_comments_limit", self.suspicious_comments_limit, "must not exceed comments_limit"
            )
        if self.suspicious_posts_limit > self.posts_limit:
            raise InvalidSettingError(
                "suspicious_posts_limit", self.suspicious_posts_limit, "must not exceed posts_limit"
            )
        if not 1 <= self.digest_length <= 64:
            raise InvalidSettingError("digest_length", self.digest_length, "must be between 1 and 64")
        if self.store_timeout_seconds <= 0:
            raise InvalidSettingError("store_timeout_seconds", self.store_timeout_seconds, "must be > 0")
        if self.suspicion_retention_seconds <= 0:
            raise InvalidSettingError(
                "suspicion_retention_seconds", self.suspicion_retention_seconds, "must be > 0"
            )

    def limit_policy(self) -> LimitPolicy:
        return LimitPolicy(
            base={ActionType.COMMENTS: self.comments_limit, ActionType.POSTS: self.posts_limit},
            suspicious={
                ActionType.COMMENTS: self.suspicious_comments_limit,
                ActionType.POSTS: self.suspicious_posts_limit,
            },
        )


def load_settings() -> QuotaSettings:
    """Read :class:`QuotaSettings` from the process environment."""
    return EnvSettingsLoader().load(QuotaSettings)


__all__ = ["STORE_BACKENDS", "QuotaSettings", "load_settings"]
