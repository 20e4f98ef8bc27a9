"""Kernel time – Clock port and implementations.

Everything that reads the time takes a :class:`Clock`, so tests can pin
and step it across UTC midnight.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


def as_utc(moment: datetime) -> datetime:
    """Return *moment* in UTC; naive datetimes are taken to already be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Stands still until told to move; always reports UTC."""

    def __init__(self, fixed: datetime) -> None:
        self._fixed = as_utc(fixed)

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: float) -> None:
        """Step forward by ``timedelta(**kwargs)``."""
        self._fixed += timedelta(**kwargs)

    def set(self, fixed: datetime) -> None:
        self._fixed = as_utc(fixed)


__all__ = ["Clock", "FrozenClock", "SystemClock", "as_utc"]
