"""Unit tests for the Redis expiring store, no running Redis required."""
from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from quota_guard.kernel.errors import StoreError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_store(**kwargs: Any) -> tuple[Any, MagicMock]:
    """Return (RedisExpiringStore, mock_client) without needing a real Redis."""
    mock_client = MagicMock()
    mock_client.get = AsyncMock(return_value=None)
    mock_client.set = AsyncMock()
    mock_client.aclose = AsyncMock()
    mock_client.eval = AsyncMock(return_value=[1, 1])

    import quota_guard.adapters.redis.store as store_mod

    mock_aioredis = MagicMock()
    mock_aioredis.from_url = MagicMock(return_value=mock_client)

    with patch.object(store_mod, "_require_redis", return_value=mock_aioredis):
        from quota_guard.adapters.redis import RedisExpiringStore
        store = RedisExpiringStore("redis://localhost:6379", **kwargs)

    return store, mock_client


# ---------------------------------------------------------------------------
# RedisExpiringStore
# ---------------------------------------------------------------------------


class TestRedisExpiringStore:
    def test_get_miss_returns_none(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            assert await store.get("missing") is None
            client.get.assert_awaited_once_with("quota:missing")
        asyncio.run(run())

    def test_get_decodes_json(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            client.get = AsyncMock(return_value=b'{"user_ids":["a"]}')
            assert await store.get("k") == {"user_ids": ["a"]}
        asyncio.run(run())

    def test_set_encodes_with_ttl(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            await store.set("k", 3, 60)
            client.set.assert_awaited_once_with("quota:k", "3", ex=60)
        asyncio.run(run())

    def test_fractional_ttl_rounds_up(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            await store.set("k", 1, 0.2)
            client.set.assert_awaited_once_with("quota:k", "1", ex=1)
        asyncio.run(run())

    def test_custom_prefix(self) -> None:
        async def run() -> None:
            store, client = _make_store(prefix="ext:")
            await store.get("k")
            client.get.assert_awaited_once_with("ext:k")
        asyncio.run(run())

    def test_connection_error_becomes_store_error(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            client.get = AsyncMock(side_effect=RedisConnectionError("refused"))
            with pytest.raises(StoreError) as exc_info:
                await store.get("k")
            assert exc_info.value.backend == "redis"
        asyncio.run(run())

    def test_write_error_becomes_store_error(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            client.set = AsyncMock(side_effect=RedisConnectionError("refused"))
            with pytest.raises(StoreError):
                await store.set("k", 1, 60)
        asyncio.run(run())

    def test_malformed_value_becomes_store_error(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            client.get = AsyncMock(return_value=b"\xff not json")
            with pytest.raises(StoreError):
                await store.get("k")
        asyncio.run(run())

    def test_sweep_is_noop(self) -> None:
        store, _ = _make_store()
        assert asyncio.run(store.sweep()) == 0

    def test_close_calls_aclose(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            await store.close()
            client.aclose.assert_awaited_once()
        asyncio.run(run())

    def test_consume_runs_script_over_prefixed_keys(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            assert await store.consume(["a", "b"], 10, 90.5) == (True, 1)
            script, numkeys, *rest = client.eval.await_args.args
            assert "redis.call(\"SET\"" in script
            assert numkeys == 2
            assert rest == ["quota:a", "quota:b", 10, 91]
            client.get.assert_not_awaited()
            client.set.assert_not_awaited()
        asyncio.run(run())

    def test_consume_denied_reply(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            client.eval = AsyncMock(return_value=[0, 10])
            assert await store.consume(["a"], 10, 60) == (False, 10)
        asyncio.run(run())

    def test_consume_error_becomes_store_error(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            client.eval = AsyncMock(side_effect=RedisConnectionError("refused"))
            with pytest.raises(StoreError) as exc_info:
                await store.consume(["a", "b"], 10, 60)
            assert exc_info.value.key == "a"
        asyncio.run(run())
