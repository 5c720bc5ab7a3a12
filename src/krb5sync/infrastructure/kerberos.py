"""Kerberos library adapter.

Guarded import so python-gssapi is only required when the built-in
Kerberos provider is actually used. Any object with a ``parse_name``
method can stand in for :class:`GssapiContext`; plugins supply one through
the ``create_kerberos_context`` hook.

The native error text must be read straight after the failing call:
later library calls may overwrite the descriptive error state.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from krb5sync.domain.errors import KerberosError, PrincipalError
from krb5sync.domain.principal import Principal

logger = logging.getLogger(__name__)

_gssapi_available = False
try:
    import gssapi  # type: ignore[import-not-found]  # noqa: F401

    _gssapi_available = True
except ImportError:
    pass


class KerberosContext(Protocol):
    """What the rest of krb5sync needs from a Kerberos library."""

    def parse_name(self, text: str) -> Any:
        """Parse *text* into a library principal.

        Raises :class:`KerberosError` carrying the library's message.
        """
        ...


class GssapiContext:
    """Kerberos context backed by python-gssapi.

    Names are imported as ``KRB5_NT_PRINCIPAL_NAME`` and canonicalized for
    the Kerberos mechanism, which runs the krb5 name parser (including
    default realm qualification).
    """

    def __init__(self) -> None:
        import gssapi
        import gssapi.exceptions

        self._gssapi = gssapi
        self._gss_error: type[Exception] = gssapi.exceptions.GSSError
        try:
            mechs = gssapi.raw.indicate_mechs()
        except self._gss_error as exc:
            msg = f"cannot initialize Kerberos context: {exc.gen_message()}"
            raise KerberosError(msg) from exc
        if gssapi.MechType.kerberos not in mechs:
            msg = "cannot initialize Kerberos context: Kerberos mechanism not available"
            raise KerberosError(msg)

    def parse_name(self, text: str) -> Any:
        gssapi = self._gssapi
        try:
            name = gssapi.Name(text, name_type=gssapi.NameType.kerberos_principal)
            return name.canonicalize(gssapi.MechType.kerberos)
        except self._gss_error as exc:
            raise KerberosError(exc.gen_message()) from exc


def init_context() -> GssapiContext:
    """Create the process-wide Kerberos context."""
    if not _gssapi_available:
        msg = "cannot initialize Kerberos context: python-gssapi is not installed"
        raise KerberosError(msg)
    context = GssapiContext()
    logger.debug("Initialized gssapi Kerberos context")
    return context


def resolve_principal(context: KerberosContext, text: str) -> Principal:
    """Parse *text* into a :class:`Principal` using *context*."""
    try:
        handle = context.parse_name(text)
    except KerberosError as exc:
        msg = f"cannot parse user {text} into principal: {exc.message}"
        raise PrincipalError(msg, user=text, native=exc.message) from exc
    return Principal(text=text, handle=handle)
