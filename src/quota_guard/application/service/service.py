"""Application service – QuotaService, the request/response boundary.

Control flow per request::

    validate body -> derive identity keys -> observe address/user id
    -> evaluate quota (PEEK or CONSUME) -> QuotaResponse

Validation errors propagate to the transport as client errors.  Anything
that fails after validation is logged and answered fail-open with
``default_remaining_on_failure``.
"""
from __future__ import annotations

from typing import Any

from quota_guard.application.abuse import AbuseHeuristic
from quota_guard.application.quota import (
    DEFAULT_REMAINING_ON_FAILURE,
    Mode,
    QuotaDecision,
    QuotaEngine,
)
from quota_guard.application.service.requests import Action, ClientContext, QuotaRequest
from quota_guard.application.service.responses import (
    DEGRADED_MESSAGE,
    LIMIT_REACHED_MESSAGE,
    QuotaResponse,
    remaining_message,
    success_message,
)
from quota_guard.identity import IdentityDeriver
from quota_guard.kernel.time import ResetClock
from quota_guard.observability.logging import get_logger

logger = get_logger(__name__)


class QuotaService:
    """Wires the identity deriver, abuse heuristic and quota engine together."""

    def __init__(
        self,
        engine: QuotaEngine,
        heuristic: AbuseHeuristic,
        deriver: IdentityDeriver | None = None,
        reset_clock: ResetClock | None = None,
        default_remaining_on_failure: int = DEFAULT_REMAINING_ON_FAILURE,
    ) -> None:
        self._engine = engine
        self._heuristic = heuristic
        self._deriver = deriver or IdentityDeriver()
        self._reset_clock = reset_clock or ResetClock()
        self._default_remaining = default_remaining_on_failure

    async def handle(self, payload: Any, context: ClientContext) -> QuotaResponse:
        """Validate *payload* and evaluate it for the caller in *context*.

        Raises :class:`~quota_guard.kernel.errors.InputError` before any
        state is touched when the body is invalid.
        """
        request = QuotaRequest.from_payload(payload)
        try:
            return await self._evaluate(request, context)
        except Exception as exc:  # noqa: BLE001
            logger.exception(
                "quota_evaluation_failed",
                action=request.action.value,
                type=request.action_type.value,
                network_address=context.network_address,
            )
            return self._fail_open(request, exc)

    async def _evaluate(self, request: QuotaRequest, context: ClientContext) -> QuotaResponse:
        keys = self._deriver.derive(context.network_address, context.user_agent, request.device_fingerprint)
        suspicious = await self._heuristic.observe(context.network_address, request.user_id)

        mode = Mode.CONSUME if request.action is Action.CHECK_AND_INCREMENT else Mode.PEEK
        decision = await self._engine.evaluate(keys, request.action_type, suspicious, mode)

        logger.info(
            "quota_evaluated",
            action=request.action.value,
            type=request.action_type.value,
            allowed=decision.allowed,
            used=decision.used,
            limit=decision.limit,
            suspicious=suspicious,
        )
        if mode is Mode.CONSUME:
            return self._consume_response(decision)
        return self._peek_response(decision)

    def _consume_response(self, decision: QuotaDecision) -> QuotaResponse:
        return QuotaResponse(
            allowed=decision.allowed,
            remaining=decision.remaining,
            used=decision.used,
            total=decision.limit,
            reset_time=decision.reset_at,
            message=success_message(decision.action) if decision.allowed else LIMIT_REACHED_MESSAGE,
            suspicious=decision.suspicious,
        )

    def _peek_response(self, decision: QuotaDecision) -> QuotaResponse:
        return QuotaResponse(
            remaining=decision.remaining,
            used=decision.used,
            total=decision.limit,
            reset_time=decision.reset_at,
            message=remaining_message(decision.remaining, decision.limit, decision.action),
            suspicious=decision.suspicious,
        )

    def _fail_open(self, request: QuotaRequest, exc: Exception) -> QuotaResponse:
        return QuotaResponse(
            allowed=True if request.action is Action.CHECK_AND_INCREMENT else None,
            remaining=self._default_remaining,
            reset_time=self._reset_clock.next_reset_instant(),
            message=DEGRADED_MESSAGE,
            suspicious=False,
            error=type(exc).__name__,
        )


__all__ = ["QuotaService"]
