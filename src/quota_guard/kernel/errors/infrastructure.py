"""Infrastructure errors – backing store failures."""

from __future__ import annotations

from typing import Any

from quota_guard.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class StoreError(InfrastructureError):
    """A backing store was unreachable or returned a malformed payload."""

    default_code = "store_error"

    def __init__(
        self,
        message: str,
        *,
        backend: str | None = None,
        key: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.backend = backend
        self.key = key

    def log_context(self) -> dict[str, Any]:
        context = super().log_context()
        if self.backend is not None:
            context["backend"] = self.backend
        return context


class StoreTimeoutError(StoreError):
    """A store operation exceeded its deadline."""

    default_code = "store_timeout"


__all__ = ["InfrastructureError", "StoreError", "StoreTimeoutError"]
