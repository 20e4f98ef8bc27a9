"""Kernel locks – LoopBoundLock."""
from __future__ import annotations

import asyncio
from typing import Any


class LoopBoundLock:
    """An :class:`asyncio.Lock` that follows the running event loop.

    A plain ``asyncio.Lock`` attaches to the first loop that waits on it
    and raises ``RuntimeError`` from any other loop.  Services built once
    and driven through ``asyncio.run`` per call (or a ``TestClient``
    without a context manager) hop loops, so the underlying lock is
    replaced whenever the running loop changes.  Mutual exclusion holds
    within one loop.
    """

    def __init__(self) -> None:
        self._lock: asyncio.Lock | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def _current(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._lock is None or self._loop is not loop:
            self._lock = asyncio.Lock()
            self._loop = loop
        return self._lock

    def locked(self) -> bool:
        return self._lock is not None and self._lock.locked()

    async def __aenter__(self) -> None:
        await self._current().acquire()

    async def __aexit__(self, *exc_info: Any) -> None:
        self._current().release()


__all__ = ["LoopBoundLock"]
