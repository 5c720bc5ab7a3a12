"""The click command class behind ``krb5-sync``."""

from __future__ import annotations

import inspect
from typing import Any

import click


class Krb5SyncCommand(click.Command):
    """click Command that also answers ``--examples``.

    Examples stay out of ``--help`` so the option list fits on one screen.
    """

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = inspect.cleandoc(examples) if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing or self.examples is None:
            return
        click.echo("Examples:")
        for line in self.examples.splitlines():
            click.echo(f"  {line}")
        ctx.exit()
