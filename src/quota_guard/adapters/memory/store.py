"""Memory adapter – InMemoryExpiringStore."""
from __future__ import annotations

import copy
from datetime import datetime, timedelta
from typing import Any

from quota_guard.application.store import ExpiringStore
from quota_guard.kernel.time import Clock, SystemClock


class InMemoryExpiringStore(ExpiringStore[Any]):
    """Process-local store; state is lost on restart.

    Expired entries read as absent but stay in memory until :meth:`sweep`.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or SystemClock()
        # key -> (value, expires_at)
        self._entries: dict[str, tuple[Any, datetime]] = {}

    async def get(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock.now() >= expires_at:
            return None
        return copy.deepcopy(value)

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        expires_at = self._clock.now() + timedelta(seconds=ttl_seconds)
        self._entries[key] = (copy.deepcopy(value), expires_at)

    async def sweep(self) -> int:
        now = self._clock.now()
        expired = [k for k, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            self._entries.pop(key, None)
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


__all__ = ["InMemoryExpiringStore"]
