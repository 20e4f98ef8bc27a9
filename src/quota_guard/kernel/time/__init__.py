"""Kernel time – Clock port, implementations and the daily reset window."""
from quota_guard.kernel.time.clock import Clock, FrozenClock, SystemClock, as_utc
from quota_guard.kernel.time.window import ResetClock

__all__ = ["Clock", "FrozenClock", "ResetClock", "SystemClock", "as_utc"]
