"""Redis adapter – shared expiring store for multi-instance deployments."""
from quota_guard.adapters.redis.store import RedisExpiringStore

__all__ = ["RedisExpiringStore"]
