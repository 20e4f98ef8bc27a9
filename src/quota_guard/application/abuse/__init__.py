"""Application abuse – suspicion heuristic."""
from quota_guard.application.abuse.heuristic import (
    DEFAULT_SUSPICION_RETENTION_SECONDS,
    DEFAULT_SUSPICION_THRESHOLD,
    AbuseHeuristic,
    SuspicionRecord,
    suspicion_key,
)

__all__ = [
    "DEFAULT_SUSPICION_RETENTION_SECONDS",
    "DEFAULT_SUSPICION_THRESHOLD",
    "AbuseHeuristic",
    "SuspicionRecord",
    "suspicion_key",
]
