"""FastAPI adapter – create_app, the HTTP surface of the quota service."""
from __future__ import annotations

import contextlib
from typing import Any, AsyncIterator

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from quota_guard.adapters.fastapi.client_ip import client_context
from quota_guard.adapters.fastapi.exception_mapper import register_error_handlers
from quota_guard.application.service import QuotaService
from quota_guard.application.store import ExpiringStore
from quota_guard.bootstrap import build_service, build_store
from quota_guard.config.quota import QuotaSettings, load_settings
from quota_guard.kernel.errors import InputError
from quota_guard.observability.logging import JsonLoggerFactory, get_logger

logger = get_logger(__name__)


def QuotaRouter(service: QuotaService, path: str = "/api/daily-limit") -> APIRouter:
    """Return a router exposing the quota service at ``POST {path}``."""
    router = APIRouter(tags=["quota"])

    @router.post(path)
    async def daily_limit(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
        except ValueError as exc:
            raise InputError("Request body must be valid JSON") from exc
        response = await service.handle(payload, client_context(request))
        return JSONResponse(response.to_dict())

    @router.get("/health/live", tags=["ops"])
    async def liveness() -> dict[str, str]:
        return {"status": "ok"}

    return router


def create_app(
    settings: QuotaSettings | None = None,
    service: QuotaService | None = None,
    store: ExpiringStore[Any] | None = None,
) -> FastAPI:
    """Build the ASGI app.

    When *service* is omitted it is built from *settings* around *store*
    (or the configured backend); the store is closed on shutdown.
    """
    settings = settings or QuotaSettings()
    owned_store: ExpiringStore[Any] | None = None
    if service is None:
        if store is None:
            store = owned_store = build_store(settings)
        service = build_service(settings, store=store)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:  # noqa: ARG001
        logger.info("quota_service_started", backend=settings.store_backend, path=settings.endpoint_path)
        yield
        if owned_store is not None:
            await owned_store.close()

    app = FastAPI(title="quota-guard", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    register_error_handlers(app)
    app.include_router(QuotaRouter(service, settings.endpoint_path))
    return app


def app_from_env() -> FastAPI:
    """ASGI factory: read ``QUOTA_*`` settings, configure JSON logging, build the app.

    Usage::

        uvicorn --factory quota_guard.adapters.fastapi:app_from_env
    """
    settings = load_settings()
    JsonLoggerFactory.configure(settings.log_level)
    return create_app(settings)


__all__ = ["QuotaRouter", "app_from_env", "create_app"]
