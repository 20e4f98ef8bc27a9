"""Testing fakes – clocks and misbehaving stores for quota tests."""
from quota_guard.kernel.time import FrozenClock
from quota_guard.testing.fakes.clock import DEFAULT_NOW, FakeClock, clock_before_reset
from quota_guard.testing.fakes.stores import BrokenStore, HangingStore

__all__ = ["DEFAULT_NOW", "BrokenStore", "FakeClock", "FrozenClock", "HangingStore", "clock_before_reset"]
