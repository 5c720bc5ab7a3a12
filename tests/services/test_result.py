"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from krb5sync.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="change_status", data={"user": "alice"})
        assert result.ok is True
        assert result.op == "change_status"
        assert result.data == {"user": "alice"}
        assert result.warnings == []
        assert result.error is None

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure(
            "replay_queue", ErrorCode.IO_ERROR, "cannot open queue file q", path="q"
        )
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "IO_ERROR"
        assert result.error.detail == {"path": "q"}

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="sync", data={"actions": ["password", "enable"]})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["actions"] == ["password", "enable"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="sync")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        error = ServiceError(code="BACKEND_ERROR", message="bad")
        assert error.detail == {}

    def test_usage_exit_code(self) -> None:
        assert ServiceError(code=ErrorCode.USAGE_ERROR, message="x").exit_code == 2

    @pytest.mark.parametrize(
        "code",
        [c for c in ErrorCode if c is not ErrorCode.USAGE_ERROR],
    )
    def test_failure_exit_code(self, code: ErrorCode) -> None:
        assert ServiceError(code=code, message="x").exit_code == 1
