"""SyncSession — the per-process Kerberos context and backend state.

Opened once, after the invocation has been validated, and held for the
rest of the run. Never shared across processes or persisted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from krb5sync.domain.errors import PluginError
from krb5sync.infrastructure.queue_file import DEFAULT_MAX_LINE_LENGTH

if TYPE_CHECKING:
    from krb5sync.config.settings import Krb5SyncSettings
    from krb5sync.infrastructure.kerberos import KerberosContext
    from krb5sync.plugins.backend import SyncBackend
    from krb5sync.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


@dataclass
class SyncSession:
    """Everything a sync operation needs to reach the backend."""

    context: KerberosContext
    backend: SyncBackend
    state: Any
    error_text_limit: int = 8192
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH

    @classmethod
    def open(cls, settings: Krb5SyncSettings, plugins: PluginManager) -> SyncSession:
        """Create the Kerberos context, then construct and initialize the backend.

        Raises :class:`~krb5sync.domain.errors.Krb5SyncError` subclasses on
        failure.
        """
        context = plugins.create_kerberos_context(settings)
        backend = plugins.create_backend(settings.backend.name, **settings.backend.options)
        try:
            state = backend.init(context)
        except Exception as exc:
            msg = f"plugin initialization failed: {exc}"
            raise PluginError(msg, backend=settings.backend.name) from exc
        logger.debug("Initialized backend %s", settings.backend.name)
        return cls(
            context=context,
            backend=backend,
            state=state,
            error_text_limit=settings.backend.error_text_limit,
            max_line_length=settings.queue.max_line_length,
        )
