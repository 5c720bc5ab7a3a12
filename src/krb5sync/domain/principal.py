"""Resolved Kerberos principal."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Principal:
    """A parsed principal plus the name it was parsed from.

    ``text`` is kept exactly as supplied so that log lines and error
    messages name the user the way the caller wrote it. ``handle`` is the
    Kerberos library's own object and is opaque to everything but the
    backend.
    """

    text: str
    handle: Any = field(compare=False, repr=False)

    def __str__(self) -> str:
        return self.text
