"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult. A failed
result is terminal: the CLI maps its error code to an exit status and
performs no further work.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Failure categories and their exit semantics."""

    USAGE_ERROR = "USAGE_ERROR"
    IO_ERROR = "IO_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    PRINCIPAL_ERROR = "PRINCIPAL_ERROR"
    BACKEND_ERROR = "BACKEND_ERROR"
    KERBEROS_ERROR = "KERBEROS_ERROR"
    PLUGIN_ERROR = "PLUGIN_ERROR"


EXIT_USAGE = 2
EXIT_FAILURE = 1


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @property
    def exit_code(self) -> int:
        return EXIT_USAGE if self.code == ErrorCode.USAGE_ERROR else EXIT_FAILURE


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"change_password"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        warnings: list[str] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        """Shorthand for a failed result."""
        return cls(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail),
        )
