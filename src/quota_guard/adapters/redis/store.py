"""Redis adapter – RedisExpiringStore."""
from __future__ import annotations

import json
import math
from typing import Any, Sequence

from quota_guard.application.store import ExpiringStore
from quota_guard.kernel.errors import StoreError

_BACKEND = "redis"

# KEYS: counters; ARGV[1]: limit, ARGV[2]: ttl in seconds.  Replies {allowed, count}.
_CONSUME_SCRIPT = """
local used = 0
for _, key in ipairs(KEYS) do
    local raw = redis.call("GET", key)
    if raw and string.match(raw, "^%d+$") then
        used = math.max(used, tonumber(raw))
    end
end
if used >= tonumber(ARGV[1]) then
    return {0, used}
end
for _, key in ipairs(KEYS) do
    redis.call("SET", key, used + 1, "EX", ARGV[2])
end
return {1, used + 1}
"""


def _require_redis() -> Any:
    try:
        import redis.asyncio as aioredis
        return aioredis
    except ImportError as exc:
        raise ImportError("The Redis adapter needs the 'redis' package") from exc


def _redis_errors() -> tuple[type[BaseException], ...]:
    from redis.exceptions import RedisError

    return (RedisError, OSError)


class RedisExpiringStore(ExpiringStore[Any]):
    """JSON values under native Redis key expiry.

    Redis evicts expired keys itself, so :meth:`sweep` has nothing to do.
    Keys are namespaced with ``prefix``.  :meth:`consume` runs as one Lua
    script, so workers sharing the server never lose an increment.
    """

    def __init__(self, url: str, prefix: str = "quota:", **kwargs: Any) -> None:
        aioredis = _require_redis()
        self._client = aioredis.from_url(url, **kwargs)
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> Any:
        try:
            raw = await self._client.get(self._key(key))
        except _redis_errors() as exc:
            raise StoreError("Redis GET failed", backend=_BACKEND, key=key, cause=exc) from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise StoreError("Malformed value in Redis", backend=_BACKEND, key=key, cause=exc) from exc

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        payload = json.dumps(value, separators=(",", ":"))
        try:
            await self._client.set(self._key(key), payload, ex=max(1, math.ceil(ttl_seconds)))
        except _redis_errors() as exc:
            raise StoreError("Redis SET failed", backend=_BACKEND, key=key, cause=exc) from exc

    async def consume(self, keys: Sequence[str], limit: int, ttl_seconds: float) -> tuple[bool, int]:
        prefixed = [self._key(k) for k in keys]
        try:
            allowed, count = await self._client.eval(
                _CONSUME_SCRIPT, len(prefixed), *prefixed, limit, max(1, math.ceil(ttl_seconds))
            )
        except _redis_errors() as exc:
            key = keys[0] if keys else None
            raise StoreError("Redis consume script failed", backend=_BACKEND, key=key, cause=exc) from exc
        return bool(int(allowed)), int(count)

    async def sweep(self) -> int:
        return 0

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["RedisExpiringStore"]
