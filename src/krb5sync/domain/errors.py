"""Exception hierarchy raised below the service layer.

Each exception carries the ``code`` its failure maps to in a
:class:`~krb5sync.services.result.ServiceError`. Services catch these and
return failed results; nothing above the service layer sees them.
"""

from __future__ import annotations

from typing import Any


class Krb5SyncError(Exception):
    """Base class for all krb5sync failures."""

    code = "ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class QueueReadError(Krb5SyncError):
    """A queue file could not be opened, read, or removed."""

    code = "IO_ERROR"


class QueueFormatError(Krb5SyncError):
    """Queue file content does not follow the positional record grammar."""

    code = "PROTOCOL_ERROR"


class KerberosError(Krb5SyncError):
    """The Kerberos library reported a failure.

    ``message`` is the library's own error text, captured right after the
    failing call.
    """

    code = "KERBEROS_ERROR"


class PrincipalError(Krb5SyncError):
    """A principal name could not be parsed."""

    code = "PRINCIPAL_ERROR"


class PluginError(Krb5SyncError):
    """No usable backend could be loaded or initialized."""

    code = "PLUGIN_ERROR"
