"""FastAPI adapter – map quota_guard errors onto HTTP responses."""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from quota_guard.kernel.errors import BaseError, InfrastructureError, InputError
from quota_guard.observability.logging import get_logger

logger = get_logger(__name__)

# most specific first
ERROR_STATUS: tuple[tuple[type[BaseError], int], ...] = (
    (InputError, 400),
    (InfrastructureError, 503),
)


def status_for(exc: BaseError) -> int:
    for exc_type, status in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status
    return 500


async def _handle(request: Request, exc: BaseError) -> JSONResponse:
    status = status_for(exc)
    log = logger.warning if status >= 500 else logger.info
    log("request_rejected", path=request.url.path, status=status, error=exc.message, **exc.log_context())
    return JSONResponse(status_code=status, content=exc.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    """Answer any :class:`BaseError` with its ``to_dict`` body.

    ``InputError`` -> 400, ``InfrastructureError`` -> 503, others -> 500.
    """
    app.add_exception_handler(BaseError, _handle)


__all__ = ["ERROR_STATUS", "register_error_handlers", "status_for"]
