"""Application-layer errors – request validation at the service boundary."""

from __future__ import annotations

from typing import Any

from quota_guard.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class InputError(ApplicationError):
    """A request field is missing or invalid.

    Raised before any state is touched; callers surface it as a client
    error and never retry.
    """

    default_code = "invalid_input"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        if self.field is not None:
            body["field"] = self.field
        return body


class UnknownActionError(InputError):
    """The ``action`` field names an operation the service does not offer."""

    default_code = "invalid_action"

    def __init__(self, action: object, **kwargs: Any) -> None:
        super().__init__("Invalid action", field="action", detail={"action": action}, **kwargs)
        self.action = action


__all__ = ["ApplicationError", "InputError", "UnknownActionError"]
