"""Queue record model.

A queue file holds one change that kadmind failed to push synchronously.
The on-disk grammar is positional::

    <principal>
    ad
    enable | disable | password
    [<password>]

INVARIANT: ``payload`` is present if and only if the action is PASSWORD.
"""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from krb5sync.domain.types import SyncAction, TargetSystem


class QueueRecord(BaseModel):
    """One parsed queue file."""

    model_config = {"frozen": True}

    principal_text: str
    target_system: TargetSystem
    action: SyncAction
    payload: bytes | None = None

    @model_validator(mode="after")
    def _payload_matches_action(self) -> QueueRecord:
        if self.action is SyncAction.PASSWORD and self.payload is None:
            msg = "password action requires a payload"
            raise ValueError(msg)
        if self.action is not SyncAction.PASSWORD and self.payload is not None:
            msg = f"{self.action} action takes no payload"
            raise ValueError(msg)
        return self

    @property
    def enable(self) -> bool:
        """Requested account status for ENABLE/DISABLE records."""
        return self.action is SyncAction.ENABLE
