"""Closed vocabularies for queue files and CLI actions."""

from __future__ import annotations

from enum import StrEnum


class TargetSystem(StrEnum):
    """Identity backends a queued change may be replayed against."""

    AD = "ad"


class SyncAction(StrEnum):
    """Account changes that can be synchronized."""

    ENABLE = "enable"
    DISABLE = "disable"
    PASSWORD = "password"


class InvocationMode(StrEnum):
    """How the action to perform was supplied."""

    DIRECT = "direct"
    QUEUE = "queue"
