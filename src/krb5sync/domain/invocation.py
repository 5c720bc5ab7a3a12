"""Command-line invocation rules.

Two mutually exclusive modes:
- Queue mode: ``-f FILE`` replays one queued change.
- Direct mode: ``USER`` plus at least one of ``-e``, ``-d``, ``-p``.

Validation runs before any Kerberos or backend call is made.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field

from krb5sync.domain.types import InvocationMode

DIRECT_USAGE = "Usage: krb5-sync [-d | -e] [-p <pass>] <user>"
QUEUE_USAGE = "Usage: krb5-sync -f <file>"


@dataclass
class ValidationResult:
    """Result of an invocation validation check."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    usage: str | None = None


class Invocation(BaseModel):
    """Everything the user asked for on the command line."""

    model_config = {"frozen": True}

    enable: bool = False
    disable: bool = False
    password: str | None = None
    queue_file: Path | None = None
    users: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def mode(self) -> InvocationMode:
        return InvocationMode.QUEUE if self.queue_file is not None else InvocationMode.DIRECT

    @property
    def user(self) -> str | None:
        """The single bare argument in direct mode."""
        return self.users[0] if len(self.users) == 1 else None

    @property
    def has_direct_action(self) -> bool:
        return self.enable or self.disable or self.password is not None

    def validate_modes(self) -> ValidationResult:
        """Check mode exclusivity and argument counts.

        Checks run in a fixed order and stop at the first violation so the
        user sees one diagnostic line.
        """
        if self.queue_file is None and len(self.users) != 1:
            return ValidationResult(
                valid=False,
                errors=["exactly one user must be given"],
                usage=DIRECT_USAGE,
            )
        if self.queue_file is not None and self.users:
            return ValidationResult(
                valid=False,
                errors=["a user cannot be given with a queue file"],
                usage=QUEUE_USAGE,
            )
        if self.enable and self.disable:
            return ValidationResult(valid=False, errors=["cannot specify both -d and -e"])
        if not self.has_direct_action and self.queue_file is None:
            return ValidationResult(valid=False, errors=["no action specified"])
        if self.queue_file is not None and self.has_direct_action:
            return ValidationResult(
                valid=False,
                errors=["must specify queue file or action, not both"],
            )
        return ValidationResult(valid=True)
