"""SyncBackend ABC — the contract a directory backend plugin fulfils.

The backend owns the directory protocol. krb5sync only calls it: once to
initialize, then once per account change. Its state object is opaque and
is handed back on every call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from krb5sync.domain.principal import Principal
    from krb5sync.infrastructure.kerberos import KerberosContext


class BackendStatus(NamedTuple):
    """Outcome of one backend call. ``code`` 0 means success."""

    code: int
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 0


class SyncBackend(ABC):
    """Abstract base class for directory synchronization backends.

    Subclasses are registered through the ``register_backends`` hook and
    constructed with the ``[backend] options`` table as keyword arguments.
    The change methods may return a bare integer status instead of a
    :class:`BackendStatus`.
    """

    def __init__(self, **options: Any) -> None:
        self.options = options

    @abstractmethod
    def init(self, context: KerberosContext) -> Any:
        """Prepare the backend and return its opaque state.

        Raise any exception to signal that initialization failed.
        """
        ...

    @abstractmethod
    def change_password(
        self,
        state: Any,
        context: KerberosContext,
        principal: Principal,
        password: bytes,
    ) -> BackendStatus:
        """Set *principal*'s password in the directory."""
        ...

    @abstractmethod
    def change_status(
        self,
        state: Any,
        context: KerberosContext,
        principal: Principal,
        enabled: bool,
    ) -> BackendStatus:
        """Enable or disable *principal*'s directory account."""
        ...
