"""Memory adapter – process-local expiring store."""
from quota_guard.adapters.memory.store import InMemoryExpiringStore

__all__ = ["InMemoryExpiringStore"]
