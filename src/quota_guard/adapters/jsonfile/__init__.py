"""JSON-file adapter – on-disk expiring store."""
from quota_guard.adapters.jsonfile.store import JsonFileExpiringStore

__all__ = ["JsonFileExpiringStore"]
