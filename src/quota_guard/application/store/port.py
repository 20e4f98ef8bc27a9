"""Application store – ExpiringStore port."""
from __future__ import annotations

import abc
import asyncio
from typing import Any, Generic, Sequence, TypeVar, Union

JsonValue = Union[int, float, str, bool, None, list[Any], dict[str, Any]]
V = TypeVar("V")


def as_count(value: Any) -> int:
    """Read a stored counter; anything that is not a non-negative int is 0."""
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


class ExpiringStore(abc.ABC, Generic[V]):
    """Port: key/value mapping whose entries expire after a TTL.

    Backends must treat an entry as absent once its expiry has passed,
    even if it is still physically present until the next :meth:`sweep`.
    Values are JSON-compatible so every backend can persist them.
    Backend failures are raised as :class:`~quota_guard.kernel.errors.StoreError`.
    """

    @abc.abstractmethod
    async def get(self, key: str) -> V | None:
        """Return the live value for *key*, or ``None`` when absent or expired."""

    @abc.abstractmethod
    async def set(self, key: str, value: V, ttl_seconds: float) -> None:
        """Store *value* under *key*, expiring ``ttl_seconds`` from now."""

    @abc.abstractmethod
    async def sweep(self) -> int:
        """Physically remove expired entries; return how many were removed."""

    async def consume(self, keys: Sequence[str], limit: int, ttl_seconds: float) -> tuple[bool, int]:
        """Take one unit from the counters under *keys* if their highest count is below *limit*.

        Returns ``(allowed, count)``: the new count written to every key when
        allowed, otherwise the current highest count.  This default reads and
        then writes, so it is only as atomic as the caller's own locking;
        backends that can do better override it.
        """
        values = await asyncio.gather(*(self.get(k) for k in keys))
        used = max((as_count(v) for v in values), default=0)
        if used >= limit:
            return False, used
        await asyncio.gather(*(self.set(k, used + 1, ttl_seconds) for k in keys))  # type: ignore[arg-type]
        return True, used + 1

    async def close(self) -> None:  # noqa: B027
        """Release backend resources."""


__all__ = ["ExpiringStore", "JsonValue", "as_count"]
