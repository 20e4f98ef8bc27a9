"""Application quota – QuotaEngine.

The authoritative used-count is the maximum stored count across all of a
caller's identity keys, so evading one key (fresh fingerprint storage, new
user agent) does not reset usage.  A successful consume writes the same
new count to every key.
"""
from __future__ import annotations

import asyncio
import dataclasses
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable

from quota_guard.application.quota.limits import ActionType, LimitPolicy
from quota_guard.application.store import ExpiringStore, as_count
from quota_guard.identity import IdentityKeys
from quota_guard.kernel.locks import LoopBoundLock
from quota_guard.kernel.time import ResetClock
from quota_guard.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_COUNTER_RETENTION_SECONDS = 24 * 3600
DEFAULT_SWEEP_INTERVAL_SECONDS = 300


class Mode(str, Enum):
    PEEK = "PEEK"
    CONSUME = "CONSUME"


@dataclasses.dataclass(frozen=True)
class QuotaDecision:
    """Outcome of one quota evaluation."""
    allowed: bool
    used: int
    remaining: int
    limit: int
    reset_at: datetime
    action: ActionType
    suspicious: bool = False


def counter_key(identity_key: str, window: date, action: ActionType) -> str:
    """Storage key for one identity's count of *action* within *window*."""
    return f"{identity_key}:{window.isoformat()}:{action.value}"


class QuotaEngine:
    """Counts per-identity usage and decides whether an action fits today's limit.

    Consumes go through :meth:`ExpiringStore.consume`, serialised in-process
    by a loop-bound lock.  Backends shared between processes make the
    check-and-increment atomic themselves.
    """

    def __init__(
        self,
        store: ExpiringStore[Any],
        policy: LimitPolicy | None = None,
        reset_clock: ResetClock | None = None,
        counter_retention_seconds: float = DEFAULT_COUNTER_RETENTION_SECONDS,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self._store = store
        self._policy = policy or LimitPolicy()
        self._reset_clock = reset_clock or ResetClock()
        self._retention = counter_retention_seconds
        self._sweep_interval = sweep_interval_seconds
        self._last_sweep: datetime | None = None
        self._lock = LoopBoundLock()

    @property
    def policy(self) -> LimitPolicy:
        return self._policy

    async def evaluate(
        self,
        keys: IdentityKeys,
        action: ActionType,
        suspicious: bool,
        mode: Mode,
    ) -> QuotaDecision:
        now = self._reset_clock.now()
        limit = self._policy.limit_for(action, suspicious)
        reset_at = self._reset_clock.next_reset_instant(now)
        window = self._reset_clock.current_window_date(now)
        storage_keys = [counter_key(k, window, action) for k in keys]

        if mode is Mode.PEEK:
            used = await self._used(storage_keys)
            return QuotaDecision(
                allowed=used < limit,
                used=used,
                remaining=max(0, limit - used),
                limit=limit,
                reset_at=reset_at,
                action=action,
                suspicious=suspicious,
            )

        async with self._lock:
            ttl = self._reset_clock.seconds_until_reset(now) + self._retention
            allowed, count = await self._store.consume(storage_keys, limit, ttl)
            if not allowed:
                logger.info("quota_exhausted", action=action.value, used=count, limit=limit, suspicious=suspicious)
                return QuotaDecision(
                    allowed=False,
                    used=count,
                    remaining=0,
                    limit=limit,
                    reset_at=reset_at,
                    action=action,
                    suspicious=suspicious,
                )

        await self._maybe_sweep(now)
        return QuotaDecision(
            allowed=True,
            used=count,
            remaining=max(0, limit - count),
            limit=limit,
            reset_at=reset_at,
            action=action,
            suspicious=suspicious,
        )

    async def _used(self, storage_keys: Iterable[str]) -> int:
        values = await asyncio.gather(*(self._store.get(k) for k in storage_keys))
        return max((as_count(v) for v in values), default=0)

    async def _maybe_sweep(self, now: datetime) -> None:
        if self._last_sweep is not None and (now - self._last_sweep).total_seconds() < self._sweep_interval:
            return
        self._last_sweep = now
        removed = await self._store.sweep()
        if removed:
            logger.debug("store_swept", removed=removed)


__all__ = [
    "DEFAULT_COUNTER_RETENTION_SECONDS",
    "DEFAULT_SWEEP_INTERVAL_SECONDS",
    "Mode",
    "QuotaDecision",
    "QuotaEngine",
    "counter_key",
]
