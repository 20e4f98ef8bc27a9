"""Composition root – build a QuotaService from QuotaSettings."""
from __future__ import annotations

from typing import Any

from quota_guard.application.abuse import AbuseHeuristic
from quota_guard.application.quota import QuotaEngine
from quota_guard.application.service import QuotaService
from quota_guard.application.store import ExpiringStore, FailOpenStore
from quota_guard.config.quota import QuotaSettings
from quota_guard.identity import IdentityDeriver
from quota_guard.kernel.time import Clock, ResetClock, SystemClock


def build_store(settings: QuotaSettings, clock: Clock | None = None) -> ExpiringStore[Any]:
    """Instantiate the configured backend, wrapped in :class:`FailOpenStore`."""
    clock = clock or SystemClock()
    backend: ExpiringStore[Any]
    if settings.store_backend == "redis":
        from quota_guard.adapters.redis import RedisExpiringStore

        backend = RedisExpiringStore(settings.redis_url)
    elif settings.store_backend == "file":
        from quota_guard.adapters.jsonfile import JsonFileExpiringStore

        backend = JsonFileExpiringStore(settings.store_path, clock=clock)
    else:
        from quota_guard.adapters.memory import InMemoryExpiringStore

        backend = InMemoryExpiringStore(clock=clock)
    return FailOpenStore(backend, timeout_seconds=settings.store_timeout_seconds)


def build_service(
    settings: QuotaSettings | None = None,
    store: ExpiringStore[Any] | None = None,
    clock: Clock | None = None,
) -> QuotaService:
    """Wire engine, heuristic and deriver around one shared store."""
    settings = settings or QuotaSettings()
    clock = clock or SystemClock()
    store = store if store is not None else build_store(settings, clock)
    reset_clock = ResetClock(clock)

    engine = QuotaEngine(
        store,
        policy=settings.limit_policy(),
        reset_clock=reset_clock,
        counter_retention_seconds=settings.counter_retention_seconds,
        sweep_interval_seconds=settings.sweep_interval_seconds,
    )
    heuristic = AbuseHeuristic(
        store,
        clock=clock,
        threshold=settings.suspicion_threshold,
        retention_seconds=settings.suspicion_retention_seconds,
    )
    return QuotaService(
        engine,
        heuristic,
        deriver=IdentityDeriver(settings.digest_length),
        reset_clock=reset_clock,
        default_remaining_on_failure=settings.default_remaining_on_failure,
    )


__all__ = ["build_service", "build_store"]
