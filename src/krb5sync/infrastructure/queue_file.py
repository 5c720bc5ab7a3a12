"""Queue file reading, parsing, and removal.

INVARIANT: Nothing in this module modifies a queue file except
:func:`remove_queue_file`, and the service layer only calls that after the
backend has confirmed the change. Any failure here leaves the file on disk
so the next run can retry it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from krb5sync.domain.errors import QueueFormatError, QueueReadError
from krb5sync.domain.queue import QueueRecord
from krb5sync.domain.types import SyncAction, TargetSystem

# Matches the stdio BUFSIZ the queue producer writes against.
DEFAULT_MAX_LINE_LENGTH = 8192


def open_queue_file(path: Path) -> BinaryIO:
    """Open *path* for binary reading."""
    try:
        return path.open("rb")
    except OSError as exc:
        msg = f"cannot open queue file {path}: {exc.strerror or exc}"
        raise QueueReadError(msg, path=str(path)) from exc


def read_line(handle: BinaryIO, label: str, *, limit: int = DEFAULT_MAX_LINE_LENGTH) -> bytes:
    """Read one newline-terminated line and strip the newline.

    A line with no terminator inside *limit* bytes, including a final line
    cut off by end of file, is rejected: a partially read queue file cannot
    be consumed safely.
    """
    try:
        line = handle.readline(limit)
    except OSError as exc:
        msg = f"cannot read from queue file {label}: {exc.strerror or exc}"
        raise QueueReadError(msg, path=label) from exc
    if not line:
        msg = f"cannot read from queue file {label}: unexpected end of file"
        raise QueueReadError(msg, path=label)
    if not line.endswith(b"\n"):
        if len(line) >= limit:
            msg = f"line too long in queue file {label}"
        else:
            msg = f"incomplete line in queue file {label}"
        raise QueueFormatError(msg, path=label)
    return line[:-1]


def _read_text_field(handle: BinaryIO, label: str, field: str, limit: int) -> str:
    raw = read_line(handle, label, limit=limit)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"invalid {field} encoding in queue file {label}"
        raise QueueFormatError(msg, path=label, field=field) from exc


def parse_queue_record(
    handle: BinaryIO,
    label: str,
    *,
    limit: int = DEFAULT_MAX_LINE_LENGTH,
) -> QueueRecord:
    """Parse the positional record grammar from an open queue file.

    Enable and disable records stop after the action line. Password records
    always consume exactly one more line, taken as raw bytes; an empty
    password is valid.
    """
    principal_text = _read_text_field(handle, label, "principal", limit)

    target = _read_text_field(handle, label, "target_system", limit)
    try:
        target_system = TargetSystem(target)
    except ValueError:
        msg = f"unknown target system {target} in queue file {label}"
        raise QueueFormatError(msg, path=label, field="target_system") from None

    action_text = _read_text_field(handle, label, "action", limit)
    try:
        action = SyncAction(action_text)
    except ValueError:
        msg = f"unknown action {action_text} in queue file {label}"
        raise QueueFormatError(msg, path=label, field="action") from None

    payload = read_line(handle, label, limit=limit) if action is SyncAction.PASSWORD else None

    return QueueRecord(
        principal_text=principal_text,
        target_system=target_system,
        action=action,
        payload=payload,
    )


def remove_queue_file(path: Path) -> None:
    """Delete a queue file whose change has been applied."""
    try:
        os.unlink(path)
    except OSError as exc:
        msg = f"unable to unlink queue file {path}: {exc.strerror or exc}"
        raise QueueReadError(msg, path=str(path), applied=True) from exc
