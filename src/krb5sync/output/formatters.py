"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich markup) or machines
(--json). Quiet mode drops the success summary entirely.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from krb5sync.output.console import create_console, get_output, style_for_key

if TYPE_CHECKING:
    from krb5sync.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output flags taken from the CLI."""

    json_output: bool = False
    quiet: bool = False
    no_color: bool = False


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output flags; defaults to human, non-quiet output.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if result.ok and settings.quiet:
        return ""

    console = create_console(no_color=settings.no_color)
    if result.ok:
        console.print(f"[sync.ok]OK[/]: [sync.op]{escape(result.op)}[/]")
        for key, value in result.data.items():
            style = style_for_key(key)
            rendered = escape(_format_value(value))
            if style:
                rendered = f"[{style}]{rendered}[/]"
            console.print(f"  [sync.key]{escape(key)}[/]: {rendered}")
    else:
        message = result.error.message if result.error else "Unknown error"
        console.print(f"[sync.error]ERROR[/]: [sync.op]{escape(result.op)}[/] - {escape(message)}")
        usage = result.error.detail.get("usage") if result.error else None
        if usage:
            console.print(escape(str(usage)))
    for warning in result.warnings:
        console.print(f"[sync.warning]WARNING[/]: {escape(warning)}")
    return get_output(console).rstrip("\n")
