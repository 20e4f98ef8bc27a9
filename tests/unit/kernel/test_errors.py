"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import pytest

from quota_guard.kernel.errors import (
    ApplicationError,
    BaseError,
    InfrastructureError,
    InputError,
    StoreError,
    StoreTimeoutError,
    UnknownActionError,
)


class TestBaseError:
    def test_defaults(self) -> None:
        err = BaseError("boom")
        assert err.message == "boom"
        assert err.code == "base_error"
        assert err.detail == {}

    def test_to_dict_is_client_body(self) -> None:
        err = BaseError("boom", code="custom", detail={"k": 1})
        assert err.to_dict() == {"error": "boom", "code": "custom"}
        assert str(err) == "boom"

    def test_log_context_carries_detail_and_cause(self) -> None:
        cause = ValueError("inner")
        err = BaseError("outer", detail={"k": 1}, cause=cause)
        assert err.__cause__ is cause
        assert err.log_context() == {"error_code": "base_error", "k": 1, "cause": repr(cause)}


class TestInputError:
    def test_field_in_dict(self) -> None:
        err = InputError("User ID required", field="userId")
        assert err.to_dict() == {"error": "User ID required", "code": "invalid_input", "field": "userId"}
        assert err.code == "invalid_input"

    def test_is_application_error(self) -> None:
        assert issubclass(InputError, ApplicationError)

    def test_unknown_action(self) -> None:
        err = UnknownActionError("reset")
        assert isinstance(err, InputError)
        assert err.message == "Invalid action"
        assert err.field == "action"
        assert err.detail == {"action": "reset"}


class TestStoreError:
    def test_hierarchy(self) -> None:
        assert issubclass(StoreError, InfrastructureError)
        assert issubclass(StoreTimeoutError, StoreError)

    def test_carries_backend_and_key(self) -> None:
        err = StoreError("down", backend="redis", key="k1")
        assert err.backend == "redis"
        assert err.key == "k1"
        assert err.log_context()["backend"] == "redis"

    def test_raisable(self) -> None:
        with pytest.raises(StoreError):
            raise StoreTimeoutError("slow")
