"""FastAPI adapter – app factory, router, exception mapper, caller context."""
from quota_guard.adapters.fastapi.app import QuotaRouter, app_from_env, create_app
from quota_guard.adapters.fastapi.client_ip import client_address, client_context
from quota_guard.adapters.fastapi.exception_mapper import register_error_handlers, status_for

__all__ = [
    "QuotaRouter",
    "app_from_env",
    "client_address",
    "client_context",
    "create_app",
    "register_error_handlers",
    "status_for",
]
