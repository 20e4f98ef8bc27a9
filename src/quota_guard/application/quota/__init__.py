"""Application quota – limits and the quota-decision engine."""
from quota_guard.application.quota.limits import (
    DEFAULT_BASE_LIMITS,
    DEFAULT_REMAINING_ON_FAILURE,
    DEFAULT_SUSPICIOUS_LIMITS,
    ActionType,
    LimitPolicy,
)
from quota_guard.application.quota.engine import Mode, QuotaDecision, QuotaEngine, counter_key

__all__ = [
    "DEFAULT_BASE_LIMITS",
    "DEFAULT_REMAINING_ON_FAILURE",
    "DEFAULT_SUSPICIOUS_LIMITS",
    "ActionType",
    "LimitPolicy",
    "Mode",
    "QuotaDecision",
    "QuotaEngine",
    "counter_key",
]
