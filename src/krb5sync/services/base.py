"""BaseService — shared foundation for krb5sync services.

Services receive a zero-argument callable returning the
:class:`SyncSession`. It is only called when a service actually needs the
Kerberos context or the backend, so that argument validation never
touches either.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from krb5sync.infrastructure.session import SyncSession

SessionProvider = Callable[[], "SyncSession"]


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class SyncService(BaseService):
            def change_status(self, principal, enable) -> ServiceResult:
                session = self._session
                ...
    """

    def __init__(self, session_provider: SessionProvider) -> None:
        self._session_provider = session_provider

    @property
    def _session(self) -> SyncSession:
        return self._session_provider()
