"""The krb5-sync command: push one account change to Active Directory."""

from __future__ import annotations

from pathlib import Path

import click

from krb5sync import __version__
from krb5sync.commands._base import Krb5SyncCommand
from krb5sync.commands._context import AppContext
from krb5sync.config.settings import Krb5SyncSettings
from krb5sync.domain.invocation import Invocation


@click.command(
    cls=Krb5SyncCommand,
    examples="""\
  krb5-sync -p 'n3w-passw0rd' alice
  krb5-sync -d bob
  krb5-sync -e -p 'n3w-passw0rd' carol@EXAMPLE.ORG
  krb5-sync -f /var/spool/krb5-sync/alice-ad-enable-20261019T120000
  krb5-sync --json -f /var/spool/krb5-sync/bob-ad-password-20261019T120500""",
)
@click.version_option(version=__version__, prog_name="krb5-sync")
@click.option("-e", "--enable", is_flag=True, help="Enable the account.")
@click.option("-d", "--disable", is_flag=True, help="Disable the account.")
@click.option("-p", "--password", default=None, metavar="PASS", help="Set the password.")
@click.option(
    "-f",
    "--file",
    "queue_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Replay a queued change, deleting the file on success.",
)
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="No output on success.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.argument("users", nargs=-1, metavar="[USER]")
@click.pass_context
def cli(
    ctx: click.Context,
    enable: bool,
    disable: bool,
    password: str | None,
    queue_file: Path | None,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    users: tuple[str, ...],
) -> None:
    """Synchronize a password or account status change to Active Directory.

    Either name a USER with -e, -d, and/or -p, or replay a queue file left
    behind by a failed kadmind sync with -f.
    """
    from krb5sync.services.dispatch import DispatchService

    overrides = ctx.ensure_object(dict)
    settings = Krb5SyncSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings, plugins=overrides.get("plugins"))
    invocation = Invocation(
        enable=enable,
        disable=disable,
        password=password,
        queue_file=queue_file,
        users=users,
    )
    app.emit(DispatchService(app.open_session).dispatch(invocation))
