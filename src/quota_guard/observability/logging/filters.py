"""Observability – SensitiveFieldsFilter, a structlog redaction processor.

Device fingerprints and credentials must never reach log storage, so the
filter runs first in the processor chain and masks matching keys at any
depth of the event dict (nested dicts and lists of dicts included).
"""
from __future__ import annotations

from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "authorization",
        "cookie",
        "device_fingerprint",
        "devicefingerprint",
        "password",
        "secret",
        "token",
    }
)


class SensitiveFieldsFilter:
    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        fields = DEFAULT_SENSITIVE_FIELDS if sensitive_fields is None else sensitive_fields
        self._fields = frozenset(f.lower() for f in fields)

    def is_sensitive(self, key: str) -> bool:
        return key.lower() in self._fields

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of *data* with sensitive values masked at any depth."""
        return {k: self.REDACTED if self.is_sensitive(k) else self._scrub(v) for k, v in data.items()}

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact(value)
        if isinstance(value, (list, tuple)):
            return type(value)(self._scrub(v) for v in value)
        return value

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self.redact(event_dict)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
