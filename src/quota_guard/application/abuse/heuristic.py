"""Application abuse – identity-churn detection per network address.

An address that presents more than ``threshold`` distinct declared user
ids within the retention window is suspicious.  Ids are only ever added
to a record, and only until it holds ``threshold + 1`` of them: past that
point the address is suspicious and further ids change nothing.  The
whole record expires ``retention_seconds`` after the last observation.  Suspicion is recomputed from the record size on every
call, never cached.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any

from quota_guard.application.store import ExpiringStore
from quota_guard.kernel.locks import LoopBoundLock
from quota_guard.kernel.time import Clock, SystemClock, as_utc
from quota_guard.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SUSPICION_THRESHOLD = 3
DEFAULT_SUSPICION_RETENTION_SECONDS = 7 * 24 * 3600


def suspicion_key(network_address: str) -> str:
    return f"suspicious:{network_address}"


@dataclasses.dataclass(frozen=True)
class SuspicionRecord:
    """Distinct user ids seen from one network address."""
    user_ids: frozenset[str] = frozenset()
    last_seen: datetime | None = None

    def with_user(self, user_id: str, seen_at: datetime, cap: int | None = None) -> "SuspicionRecord":
        """Add *user_id* unless the record already holds *cap* ids; always refresh ``last_seen``."""
        if cap is not None and len(self.user_ids) >= cap and user_id not in self.user_ids:
            return dataclasses.replace(self, last_seen=seen_at)
        return SuspicionRecord(user_ids=self.user_ids | {user_id}, last_seen=seen_at)

    def to_payload(self) -> dict[str, Any]:
        return {
            "user_ids": sorted(self.user_ids),
            "last_seen": self.last_seen.isoformat() if self.last_seen else None,
        }

    @classmethod
    def from_payload(cls, payload: Any) -> "SuspicionRecord":
        """Build a record from stored JSON; anything malformed yields an empty record."""
        if not isinstance(payload, dict):
            return cls()
        user_ids = payload.get("user_ids")
        if not isinstance(user_ids, list) or not all(isinstance(u, str) for u in user_ids):
            return cls()
        last_seen: datetime | None = None
        raw_seen = payload.get("last_seen")
        if isinstance(raw_seen, str):
            try:
                last_seen = as_utc(datetime.fromisoformat(raw_seen))
            except ValueError:
                last_seen = None
        return cls(user_ids=frozenset(user_ids), last_seen=last_seen)


class AbuseHeuristic:
    """Tracks declared-id churn per address and flags suspicious ones."""

    def __init__(
        self,
        store: ExpiringStore[Any],
        clock: Clock | None = None,
        threshold: int = DEFAULT_SUSPICION_THRESHOLD,
        retention_seconds: float = DEFAULT_SUSPICION_RETENTION_SECONDS,
    ) -> None:
        self._store = store
        self._clock: Clock = clock or SystemClock()
        self._threshold = threshold
        self._retention = retention_seconds
        self._lock = LoopBoundLock()

    @property
    def threshold(self) -> int:
        return self._threshold

    def is_suspicious(self, record: SuspicionRecord) -> bool:
        # strictly greater: exactly ``threshold`` ids is still fine
        return len(record.user_ids) > self._threshold

    async def load(self, network_address: str) -> SuspicionRecord:
        return SuspicionRecord.from_payload(await self._store.get(suspicion_key(network_address)))

    async def observe(self, network_address: str, declared_user_id: str) -> bool:
        """Record *declared_user_id* against *network_address*; return the suspicion flag."""
        key = suspicion_key(network_address)
        async with self._lock:
            record = await self.load(network_address)
            updated = record.with_user(declared_user_id, as_utc(self._clock.now()), cap=self._threshold + 1)
            await self._store.set(key, updated.to_payload(), self._retention)

        suspicious = self.is_suspicious(updated)
        if suspicious:
            logger.warning(
                "suspicious_identity_churn",
                network_address=network_address,
                distinct_user_ids=len(updated.user_ids),
                threshold=self._threshold,
            )
        return suspicious


__all__ = [
    "DEFAULT_SUSPICION_RETENTION_SECONDS",
    "DEFAULT_SUSPICION_THRESHOLD",
    "AbuseHeuristic",
    "SuspicionRecord",
    "suspicion_key",
]
