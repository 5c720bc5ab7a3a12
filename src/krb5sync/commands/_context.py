"""AppContext — per-run state behind the krb5-sync command.

Configures logging, owns the plugin manager, lazily opens the
:class:`SyncSession`, and turns a ServiceResult into output plus an exit
status.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from krb5sync.config.logging import SYSLOG_ONLY, configure_logging
from krb5sync.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from krb5sync.config.settings import Krb5SyncSettings
    from krb5sync.infrastructure.session import SyncSession
    from krb5sync.plugins.manager import PluginManager
    from krb5sync.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared state for one invocation.

    Plugins and the session are created lazily so that ``--help``,
    ``--version``, and rejected invocations never load a backend or touch
    the Kerberos library.
    """

    def __init__(self, settings: Krb5SyncSettings, *, plugins: PluginManager | None = None) -> None:
        self.settings = settings
        self._plugins = plugins
        self._session: SyncSession | None = None

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            config=settings.logging,
        )

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (discovered lazily on first access)."""
        if self._plugins is None:
            from krb5sync.plugins.builtins.gssapi_plugin import GssapiPlugin
            from krb5sync.plugins.manager import PluginManager

            pm = PluginManager()
            pm.register_plugin(GssapiPlugin(), name="gssapi-builtin")
            pm.discover_and_load(
                local_dir=self.settings.plugins.local_dir,
                entry_point_group=self.settings.plugins.entry_point_group,
            )
            self._plugins = pm
        return self._plugins

    def open_session(self) -> SyncSession:
        """Return the session, creating it on first call."""
        if self._session is None:
            from krb5sync.infrastructure.session import SyncSession

            self._session = SyncSession.open(self.settings, self.plugins)
        return self._session

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, logs to syslog, and exits non-zero
          (2 for usage errors, 1 otherwise).
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            return

        assert result.error is not None
        logger.error(
            "%s failed: %s",
            result.op,
            result.error.message,
            extra=SYSLOG_ONLY,
        )
        click.echo(output, err=True)
        raise SystemExit(result.error.exit_code)
