"""Application quota – ActionType and LimitPolicy."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Mapping


class ActionType(str, Enum):
    """Category of rate-limited operation; each has its own daily quota."""

    COMMENTS = "comments"
    POSTS = "posts"


DEFAULT_BASE_LIMITS: Mapping[ActionType, int] = {ActionType.COMMENTS: 10, ActionType.POSTS: 2}
DEFAULT_SUSPICIOUS_LIMITS: Mapping[ActionType, int] = {ActionType.COMMENTS: 5, ActionType.POSTS: 1}

# Remaining count reported when the quota cannot be evaluated and the
# request is let through.
DEFAULT_REMAINING_ON_FAILURE = 9


@dataclasses.dataclass(frozen=True)
class LimitPolicy:
    """Daily ceiling per action type, tightened for suspicious addresses."""

    base: Mapping[ActionType, int] = dataclasses.field(default_factory=lambda: dict(DEFAULT_BASE_LIMITS))
    suspicious: Mapping[ActionType, int] = dataclasses.field(
        default_factory=lambda: dict(DEFAULT_SUSPICIOUS_LIMITS)
    )

    def limit_for(self, action: ActionType, suspicious: bool) -> int:
        base = self.base[action]
        if not suspicious:
            return base
        return min(base, self.suspicious.get(action, base))


__all__ = [
    "DEFAULT_BASE_LIMITS",
    "DEFAULT_REMAINING_ON_FAILURE",
    "DEFAULT_SUSPICIOUS_LIMITS",
    "ActionType",
    "LimitPolicy",
]
