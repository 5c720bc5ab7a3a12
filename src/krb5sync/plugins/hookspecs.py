"""Pluggy hook specifications for krb5sync.

Two setup-time hooks: one contributes directory backends, the other
supplies the Kerberos context used to parse principal names.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from krb5sync.config.settings import Krb5SyncSettings
    from krb5sync.infrastructure.kerberos import KerberosContext
    from krb5sync.plugins.backend import SyncBackend

hookspec = pluggy.HookspecMarker("krb5sync")


class Krb5SyncHookSpec:
    """Hook specifications for the krb5sync plugin system."""

    @hookspec
    def register_backends(self) -> dict[str, type[SyncBackend]] | None:
        """Return backend name -> SyncBackend subclass mappings."""

    @hookspec(firstresult=True)
    def create_kerberos_context(self, settings: Krb5SyncSettings) -> KerberosContext | None:
        """Return the Kerberos context for this run, or None to defer."""
