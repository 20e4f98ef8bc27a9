"""HTTP adapter – QuotaClient, the extension-side caller of the quota service.

Every failure (transport error, non-2xx status, undecodable body) is
logged and answered fail-open so a degraded quota service never blocks
the user.
"""
from __future__ import annotations

from typing import Any

from quota_guard.application.quota import DEFAULT_REMAINING_ON_FAILURE, ActionType
from quota_guard.observability.logging import get_logger

logger = get_logger(__name__)


def _require_httpx() -> Any:
    try:
        import httpx
        return httpx
    except ImportError as exc:
        raise ImportError("QuotaClient needs the 'httpx' package") from exc


class QuotaClient:
    """Thin async httpx client for the daily-limit endpoint."""

    def __init__(
        self,
        base_url: str,
        path: str = "/api/daily-limit",
        timeout: float = 10.0,
        fallback_remaining: int = DEFAULT_REMAINING_ON_FAILURE,
        **kwargs: Any,
    ) -> None:
        httpx = _require_httpx()
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, **kwargs)
        self._path = path
        self._fallback_remaining = fallback_remaining

    async def __aenter__(self) -> "QuotaClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def check_and_increment(
        self,
        user_id: str,
        device_fingerprint: str | None = None,
        action_type: ActionType = ActionType.COMMENTS,
    ) -> dict[str, Any]:
        """Consume one unit of today's quota; returns the service's JSON body."""
        try:
            return await self._post(user_id, "check_and_increment", device_fingerprint, action_type)
        except _client_errors() as exc:
            logger.warning("quota_check_failed", error=str(exc), type=action_type.value)
            return {"allowed": True, "remaining": self._fallback_remaining, "error": "Failed to check limit"}

    async def get_remaining(
        self,
        user_id: str,
        device_fingerprint: str | None = None,
        action_type: ActionType = ActionType.COMMENTS,
    ) -> int:
        """Return today's remaining count without consuming."""
        try:
            body = await self._post(user_id, "get_remaining", device_fingerprint, action_type)
        except _client_errors() as exc:
            logger.warning("quota_lookup_failed", error=str(exc), type=action_type.value)
            return self._fallback_remaining
        remaining = body.get("remaining")
        if isinstance(remaining, bool) or not isinstance(remaining, int):
            logger.warning("quota_lookup_malformed", body=body)
            return self._fallback_remaining
        return remaining

    async def _post(
        self,
        user_id: str,
        action: str,
        device_fingerprint: str | None,
        action_type: ActionType,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"userId": user_id, "action": action, "type": action_type.value}
        if device_fingerprint is not None:
            payload["deviceFingerprint"] = device_fingerprint
        response = await self._client.post(self._path, json=payload)
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict):
            raise ValueError("Quota service returned a non-object body")
        return body


def _client_errors() -> tuple[type[BaseException], ...]:
    httpx = _require_httpx()
    return (httpx.HTTPError, ValueError)


__all__ = ["QuotaClient"]
