"""Kernel time – ResetClock, the UTC calendar-day quota window."""
from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta

from quota_guard.kernel.time.clock import Clock, SystemClock, as_utc


class ResetClock:
    """Derives the current quota window and the instant it rolls over.

    Every method accepts an optional ``at`` so a caller can pin one instant
    and derive the window date and the reset instant from it consistently.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or SystemClock()

    def now(self) -> datetime:
        return as_utc(self._clock.now())

    def current_window_date(self, at: datetime | None = None) -> date:
        return as_utc(at or self._clock.now()).date()

    def next_reset_instant(self, at: datetime | None = None) -> datetime:
        tomorrow = self.current_window_date(at) + timedelta(days=1)
        return datetime.combine(tomorrow, time.min, tzinfo=UTC)

    def seconds_until_reset(self, at: datetime | None = None) -> float:
        moment = as_utc(at or self._clock.now())
        return (self.next_reset_instant(moment) - moment).total_seconds()


__all__ = ["ResetClock"]
