"""SyncService — push one account change to the directory backend.

Each public method makes exactly one backend call and reports its outcome.
A non-zero backend status is a failed result carrying the backend's own
error text; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from krb5sync.plugins.backend import BackendStatus
from krb5sync.services.base import BaseService
from krb5sync.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from krb5sync.domain.principal import Principal

logger = logging.getLogger(__name__)


class SyncService(BaseService):
    """Password and account-status changes against the backend."""

    def change_password(self, principal: Principal, password: bytes) -> ServiceResult:
        """Set *principal*'s directory password to *password*."""
        session = self._session
        status = self._call(
            "password change",
            session.backend.change_password,
            session.state,
            session.context,
            principal,
            password,
        )
        return self._respond("change_password", "password change", principal, status)

    def change_status(self, principal: Principal, enable: bool) -> ServiceResult:
        """Enable or disable *principal*'s directory account."""
        session = self._session
        status = self._call(
            "status change",
            session.backend.change_status,
            session.state,
            session.context,
            principal,
            enable,
        )
        return self._respond("change_status", "status change", principal, status, enabled=enable)

    @staticmethod
    def _call(label: str, method: Callable[..., Any], *args: Any) -> BackendStatus:
        """Run one backend method and coerce its outcome to a BackendStatus.

        Backends may return a bare integer status code.
        """
        try:
            status = method(*args)
        except Exception as exc:
            logger.debug("Backend raised during %s", label, exc_info=True)
            return BackendStatus(code=-1, message=str(exc))
        if isinstance(status, BackendStatus):
            return status
        if isinstance(status, int) and not isinstance(status, bool):
            return BackendStatus(code=status)
        logger.debug("Backend returned %r from %s", status, label)
        return BackendStatus(code=-1, message=f"backend returned {type(status).__name__}")

    def _respond(
        self,
        op: str,
        label: str,
        principal: Principal,
        status: BackendStatus,
        **data: object,
    ) -> ServiceResult:
        if not status.ok:
            limit = self._session.error_text_limit
            text = status.message[:limit]
            warnings: list[str] = []
            if len(status.message) > limit:
                warnings.append(
                    f"backend message truncated from {len(status.message)} to {limit} characters"
                )
            return ServiceResult.failure(
                op,
                ErrorCode.BACKEND_ERROR,
                f"AD {label} for {principal.text} failed ({status.code}): {text}",
                warnings=warnings,
                user=principal.text,
                status=status.code,
                backend_message=text,
            )
        logger.info("AD %s for %s succeeded", label, principal.text)
        return ServiceResult(ok=True, op=op, data={"user": principal.text, **data})
