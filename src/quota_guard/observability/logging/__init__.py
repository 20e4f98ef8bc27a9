"""Observability – structured logging helpers."""
from quota_guard.observability.logging.factory import JsonLoggerFactory, get_logger
from quota_guard.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
