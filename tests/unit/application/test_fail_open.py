"""Unit tests for the fail-open store decorator."""

from __future__ import annotations

import asyncio

import pytest

from quota_guard.adapters.memory import InMemoryExpiringStore
from quota_guard.application.store import FailOpenStore
from quota_guard.testing.fakes import BrokenStore, HangingStore


class TestFailOpenStore:
    def test_read_error_degrades_to_absent(self) -> None:
        broken = BrokenStore()
        store = FailOpenStore(broken)
        assert asyncio.run(store.get("k")) is None
        assert broken.calls == 1

    def test_write_error_is_swallowed(self) -> None:
        store = FailOpenStore(BrokenStore())
        asyncio.run(store.set("k", 1, 60))

    def test_sweep_error_reports_zero(self) -> None:
        assert asyncio.run(FailOpenStore(BrokenStore()).sweep()) == 0

    def test_timeout_degrades_to_absent(self) -> None:
        store = FailOpenStore(HangingStore(delay=5), timeout_seconds=0.01)
        assert asyncio.run(store.get("k")) is None

    def test_healthy_backend_passes_through(self, store: InMemoryExpiringStore) -> None:
        async def run() -> None:
            wrapped = FailOpenStore(store)
            await wrapped.set("k", 3, 60)
            assert await wrapped.get("k") == 3
            assert wrapped.inner is store

        asyncio.run(run())

    def test_unexpected_errors_propagate(self) -> None:
        class Exploding(InMemoryExpiringStore):
            async def get(self, key: str) -> object:
                raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            asyncio.run(FailOpenStore(Exploding()).get("k"))

    def test_consume_error_allows(self) -> None:
        broken = BrokenStore()
        assert asyncio.run(FailOpenStore(broken).consume(["a", "b"], 10, 60)) == (True, 1)
        assert broken.calls >= 1

    def test_consume_timeout_allows(self) -> None:
        store = FailOpenStore(HangingStore(delay=5), timeout_seconds=0.01)
        assert asyncio.run(store.consume(["a"], 10, 60)) == (True, 1)

    def test_consume_passes_through(self, store: InMemoryExpiringStore) -> None:
        async def run() -> None:
            wrapped = FailOpenStore(store)
            await store.set("a", 4, 60)
            assert await wrapped.consume(["a", "b"], 5, 60) == (True, 5)
            assert await wrapped.consume(["a", "b"], 5, 60) == (False, 5)

        asyncio.run(run())
