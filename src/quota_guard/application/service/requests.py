"""Application service – request and caller-context value objects."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Mapping

from quota_guard.application.quota import ActionType
from quota_guard.kernel.errors import InputError, UnknownActionError


class Action(str, Enum):
    CHECK_AND_INCREMENT = "check_and_increment"
    GET_REMAINING = "get_remaining"


@dataclasses.dataclass(frozen=True)
class QuotaRequest:
    """A validated request body."""
    user_id: str
    action: Action
    action_type: ActionType = ActionType.COMMENTS
    device_fingerprint: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "QuotaRequest":
        """Validate a decoded JSON body.

        Raises
        ------
        InputError
            Body is not an object, ``userId`` is missing or blank, ``type``
            or ``deviceFingerprint`` has the wrong shape.
        UnknownActionError
            ``action`` is not one of :class:`Action`.
        """
        if not isinstance(payload, Mapping):
            raise InputError("Request body must be a JSON object")

        user_id = payload.get("userId")
        if not isinstance(user_id, str) or not user_id.strip():
            raise InputError("User ID required", field="userId")

        raw_action = payload.get("action")
        try:
            action = Action(raw_action)
        except ValueError as exc:
            raise UnknownActionError(raw_action) from exc

        raw_type = payload.get("type")
        if raw_type is None:
            action_type = ActionType.COMMENTS
        else:
            try:
                action_type = ActionType(raw_type)
            except ValueError as exc:
                raise InputError("Invalid type", field="type", detail={"type": raw_type}) from exc

        fingerprint = payload.get("deviceFingerprint")
        if fingerprint is not None and not isinstance(fingerprint, str):
            raise InputError("deviceFingerprint must be a string", field="deviceFingerprint")

        return cls(
            user_id=user_id,
            action=action,
            action_type=action_type,
            device_fingerprint=fingerprint,
        )


@dataclasses.dataclass(frozen=True)
class ClientContext:
    """Transport-level signals supplied alongside the body.

    ``accept_language``, ``accept_encoding`` and ``referer`` are carried for
    diagnostics; key derivation does not use them.
    """
    network_address: str = ""
    user_agent: str = ""
    accept_language: str = ""
    accept_encoding: str = ""
    referer: str = ""


__all__ = ["Action", "ClientContext", "QuotaRequest"]
