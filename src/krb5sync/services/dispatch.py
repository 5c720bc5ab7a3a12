"""DispatchService — choose between direct mode and queue replay.

Pipeline: VALIDATE → OPEN SESSION → {DIRECT | QUEUE} → RESPOND

INVARIANT: A queue file is deleted only after the backend confirmed its
change. Every failure before that point leaves the file on disk, byte for
byte, so the next invocation can retry it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from krb5sync.domain.errors import Krb5SyncError
from krb5sync.domain.types import InvocationMode, SyncAction
from krb5sync.infrastructure.kerberos import resolve_principal
from krb5sync.infrastructure.queue_file import (
    open_queue_file,
    parse_queue_record,
    remove_queue_file,
)
from krb5sync.services.base import BaseService
from krb5sync.services.result import ErrorCode, ServiceResult
from krb5sync.services.sync import SyncService

if TYPE_CHECKING:
    from krb5sync.domain.invocation import Invocation
    from krb5sync.domain.principal import Principal
    from krb5sync.domain.queue import QueueRecord

logger = logging.getLogger(__name__)


def _from_error(op: str, exc: Krb5SyncError) -> ServiceResult:
    return ServiceResult.failure(op, exc.code, exc.message, **exc.detail)


class DispatchService(BaseService):
    """Runs exactly the actions one krb5-sync invocation asked for."""

    def dispatch(self, invocation: Invocation) -> ServiceResult:
        """Validate *invocation* and run it in the selected mode."""
        op = "dispatch"

        # ── VALIDATE ─────────────────────────────────────────
        vr = invocation.validate_modes()
        if not vr.valid:
            detail = {"usage": vr.usage} if vr.usage else {}
            return ServiceResult.failure(op, ErrorCode.USAGE_ERROR, "; ".join(vr.errors), **detail)

        # ── OPEN SESSION ─────────────────────────────────────
        try:
            self._session_provider()
        except Krb5SyncError as exc:
            return _from_error(op, exc)

        if invocation.mode is InvocationMode.QUEUE:
            assert invocation.queue_file is not None
            return self.replay_queue(invocation.queue_file)

        assert invocation.user is not None
        return self.run_direct(
            invocation.user,
            password=invocation.password,
            enable=invocation.enable,
            disable=invocation.disable,
        )

    def run_direct(
        self,
        user: str,
        *,
        password: str | None = None,
        enable: bool = False,
        disable: bool = False,
    ) -> ServiceResult:
        """Apply the command-line actions to *user*.

        The password change runs first; the status change runs only if it
        succeeded (or no password was given).
        """
        op = "sync"
        session = self._session
        try:
            principal = resolve_principal(session.context, user)
        except Krb5SyncError as exc:
            return _from_error(op, exc)

        sync = SyncService(self._session_provider)
        actions: list[str] = []

        if password is not None:
            result = sync.change_password(principal, os.fsencode(password))
            if not result.ok:
                return result
            actions.append(SyncAction.PASSWORD)

        if enable or disable:
            result = sync.change_status(principal, enable)
            if not result.ok:
                return result
            actions.append(SyncAction.ENABLE if enable else SyncAction.DISABLE)

        return ServiceResult(
            ok=True,
            op=op,
            data={"mode": InvocationMode.DIRECT, "user": user, "actions": actions},
        )

    def replay_queue(self, path: Path) -> ServiceResult:
        """Apply the change recorded in *path*, then delete it.

        Open, parse, principal, and backend failures return before the file
        is touched. A failed delete after a successful backend call is
        reported with ``applied=True``: the change is live but the record
        would be replayed by the next run.
        """
        op = "replay_queue"
        session = self._session
        label = str(path)

        try:
            handle = open_queue_file(path)
        except Krb5SyncError as exc:
            return _from_error(op, exc)

        with handle:
            try:
                record = parse_queue_record(handle, label, limit=session.max_line_length)
                principal = resolve_principal(session.context, record.principal_text)
            except Krb5SyncError as exc:
                return _from_error(op, exc)

            result = self._apply(record, principal)
            if not result.ok:
                assert result.error is not None
                logger.debug("Keeping queue file %s for retry", label)
                return ServiceResult.failure(
                    op,
                    result.error.code,
                    result.error.message,
                    warnings=result.warnings,
                    queue_file=label,
                    **result.error.detail,
                )

        try:
            remove_queue_file(path)
        except Krb5SyncError as exc:
            return _from_error(op, exc)

        logger.info("Processed queue file %s", label)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "mode": InvocationMode.QUEUE,
                "queue_file": label,
                "user": record.principal_text,
                "action": record.action,
            },
        )

    def _apply(self, record: QueueRecord, principal: Principal) -> ServiceResult:
        sync = SyncService(self._session_provider)
        if record.action is SyncAction.PASSWORD:
            assert record.payload is not None
            return sync.change_password(principal, record.payload)
        return sync.change_status(principal, record.enable)
