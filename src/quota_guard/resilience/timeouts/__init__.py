"""Resilience – timeout policies."""
from quota_guard.resilience.timeouts.policy import TimeoutPolicy

__all__ = ["TimeoutPolicy"]
