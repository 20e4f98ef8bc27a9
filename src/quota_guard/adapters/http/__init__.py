"""HTTP adapter – extension-side quota client."""
from quota_guard.adapters.http.client import QuotaClient

__all__ = ["QuotaClient"]
