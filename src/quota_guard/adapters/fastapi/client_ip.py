"""FastAPI adapter – caller context extraction."""
from __future__ import annotations

from typing import Any

from quota_guard.application.service import ClientContext


def client_address(request: Any) -> str:
    """Resolve the caller's network address.

    Resolution order:
    1. first entry of ``X-Forwarded-For``
    2. ``X-Real-IP``
    3. the socket peer
    """
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip
    if request.client is not None and request.client.host:
        return request.client.host
    return ""


def client_context(request: Any) -> ClientContext:
    headers = request.headers
    return ClientContext(
        network_address=client_address(request),
        user_agent=headers.get("user-agent", ""),
        accept_language=headers.get("accept-language", ""),
        accept_encoding=headers.get("accept-encoding", ""),
        referer=headers.get("referer", ""),
    )


__all__ = ["client_address", "client_context"]
