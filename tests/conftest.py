"""Shared fixtures: a frozen clock, an in-memory store and a wired service."""
from __future__ import annotations

import pytest

from quota_guard.adapters.memory import InMemoryExpiringStore
from quota_guard.application.service import ClientContext, QuotaService
from quota_guard.bootstrap import build_service
from quota_guard.config.quota import QuotaSettings
from quota_guard.kernel.time import FrozenClock
from quota_guard.testing.fakes import FakeClock


@pytest.fixture
def clock() -> FrozenClock:
    """Frozen at 2026-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def store(clock: FrozenClock) -> InMemoryExpiringStore:
    return InMemoryExpiringStore(clock=clock)


@pytest.fixture
def service(store: InMemoryExpiringStore, clock: FrozenClock) -> QuotaService:
    return build_service(QuotaSettings(), store=store, clock=clock)


@pytest.fixture
def context() -> ClientContext:
    return ClientContext(
        network_address="203.0.113.7",
        user_agent="Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0",
        accept_language="en-US",
        accept_encoding="gzip, deflate, br",
    )
