"""Application service – QuotaResponse."""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from typing import Any

from quota_guard.application.quota import ActionType


def iso_instant(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


_SUCCESS_MESSAGES = {
    ActionType.COMMENTS: "Comment generated successfully",
    ActionType.POSTS: "Post generated successfully",
}
LIMIT_REACHED_MESSAGE = "Daily limit reached"
DEGRADED_MESSAGE = "Limit check unavailable; request allowed"


def success_message(action_type: ActionType) -> str:
    return _SUCCESS_MESSAGES[action_type]


def remaining_message(remaining: int, total: int, action_type: ActionType) -> str:
    return f"{remaining} of {total} {action_type.value} remaining today"


@dataclasses.dataclass(frozen=True)
class QuotaResponse:
    """Wire response; ``allowed`` is ``None`` for ``get_remaining``."""
    remaining: int
    reset_time: datetime
    message: str
    suspicious: bool = False
    allowed: bool | None = None
    used: int | None = None
    total: int | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.allowed is not None:
            body["allowed"] = self.allowed
        body["remaining"] = self.remaining
        if self.used is not None:
            body["used"] = self.used
        if self.total is not None:
            body["total"] = self.total
        body["resetTime"] = iso_instant(self.reset_time)
        body["message"] = self.message
        body["suspicious"] = self.suspicious
        if self.error is not None:
            body["error"] = self.error
        return body


__all__ = [
    "DEGRADED_MESSAGE",
    "LIMIT_REACHED_MESSAGE",
    "QuotaResponse",
    "iso_instant",
    "remaining_message",
    "success_message",
]
