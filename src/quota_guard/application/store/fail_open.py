"""Application store – FailOpenStore, the degraded-store policy.

A quota service that cannot reach its store lets the user through rather
than blocking legitimate use during an outage.  This wrapper turns every
``StoreError`` (timeouts included) into "absent" on read, a no-op on
write and an allowed first use on consume.  Failures are logged so
operators still see them.
"""
from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from quota_guard.application.store.port import ExpiringStore
from quota_guard.kernel.errors import StoreError
from quota_guard.observability.logging import get_logger
from quota_guard.resilience.timeouts import TimeoutPolicy

V = TypeVar("V")

logger = get_logger(__name__)


class FailOpenStore(ExpiringStore[V], Generic[V]):
    """Decorates a backend with a per-call timeout and fail-open degradation."""

    def __init__(self, inner: ExpiringStore[V], timeout_seconds: float = 0.5) -> None:
        self._inner = inner
        self._timeout = TimeoutPolicy(timeout_seconds, backend=type(inner).__name__)

    @property
    def inner(self) -> ExpiringStore[V]:
        return self._inner

    async def get(self, key: str) -> V | None:
        try:
            return await self._timeout.run("get", self._inner.get(key), key=key)
        except StoreError as exc:
            logger.warning("store_read_failed", key=key, error=exc.message, **exc.log_context())
            return None

    async def set(self, key: str, value: V, ttl_seconds: float) -> None:
        try:
            await self._timeout.run("set", self._inner.set(key, value, ttl_seconds), key=key)
        except StoreError as exc:
            logger.warning("store_write_failed", key=key, error=exc.message, **exc.log_context())

    async def sweep(self) -> int:
        try:
            return await self._timeout.run("sweep", self._inner.sweep())
        except StoreError as exc:
            logger.warning("store_sweep_failed", error=exc.message, **exc.log_context())
            return 0

    async def consume(self, keys: Sequence[str], limit: int, ttl_seconds: float) -> tuple[bool, int]:
        try:
            return await self._timeout.run(
                "consume", self._inner.consume(keys, limit, ttl_seconds), key=keys[0] if keys else None
            )
        except StoreError as exc:
            logger.warning("store_consume_failed", error=exc.message, **exc.log_context())
            return True, 1

    async def close(self) -> None:
        await self._inner.close()


__all__ = ["FailOpenStore"]
