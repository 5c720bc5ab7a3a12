"""Built-in plugin providing the python-gssapi Kerberos context.

Registered last-resort (``trylast``) so that any installed plugin offering
its own Kerberos context wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

from krb5sync.infrastructure.kerberos import KerberosContext, init_context

if TYPE_CHECKING:
    from krb5sync.config.settings import Krb5SyncSettings

hookimpl = pluggy.HookimplMarker("krb5sync")


class GssapiPlugin:
    """Supplies :class:`~krb5sync.infrastructure.kerberos.GssapiContext`."""

    @hookimpl(trylast=True)
    def create_kerberos_context(self, settings: Krb5SyncSettings) -> KerberosContext | None:
        return init_context()
