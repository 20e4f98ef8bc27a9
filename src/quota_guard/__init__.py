"""
quota_guard – per-identity daily quota enforcement.

Import path convention::

    from quota_guard.identity import IdentityDeriver
    from quota_guard.application.quota import QuotaEngine, Mode
    from quota_guard.application.service import QuotaService
    from quota_guard.adapters.fastapi import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
