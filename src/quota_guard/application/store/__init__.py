"""Application store – ExpiringStore port and the fail-open decorator."""
from quota_guard.application.store.port import ExpiringStore, JsonValue, as_count
from quota_guard.application.store.fail_open import FailOpenStore

__all__ = ["ExpiringStore", "FailOpenStore", "JsonValue", "as_count"]
