"""Root error class for the quota_guard error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    ``to_dict`` is the client-facing body (``{"error", "code", ...}``);
    ``log_context`` adds ``detail`` and the cause for structured logs and
    never reaches a response.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code}

    def log_context(self) -> dict[str, Any]:
        context: dict[str, Any] = {"error_code": self.code, **self.detail}
        if self.__cause__ is not None:
            context["cause"] = repr(self.__cause__)
        return context


__all__ = ["BaseError"]
