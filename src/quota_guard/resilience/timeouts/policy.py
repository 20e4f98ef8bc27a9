"""Resilience – TimeoutPolicy, a per-call deadline for store round trips."""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Awaitable, TypeVar

from quota_guard.kernel.errors import StoreTimeoutError

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class TimeoutPolicy:
    timeout_seconds: float
    backend: str | None = None

    async def run(self, operation: str, awaitable: Awaitable[T], key: str | None = None) -> T:
        """Await *awaitable*, cancelling it after ``timeout_seconds``.

        Overruns raise :class:`StoreTimeoutError` naming *operation* and *key*.
        """
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout_seconds)
        except TimeoutError as exc:
            raise StoreTimeoutError(
                f"{operation} exceeded {self.timeout_seconds}s",
                backend=self.backend,
                key=key,
            ) from exc


__all__ = ["TimeoutPolicy"]
