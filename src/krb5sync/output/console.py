"""Rich Console factory and theme for krb5-sync output.

Consoles render to a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` function. In non-TTY environments (tests, cron,
pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SYNC_THEME = Theme(
    {
        "sync.ok": "bold green",
        "sync.error": "bold red",
        "sync.warning": "bold yellow",
        "sync.op": "bold cyan",
        "sync.key": "dim",
        "sync.user": "bold blue",
        "sync.path": "dim",
    }
)

# Data keys rendered with a dedicated style.
_KEY_STYLES: dict[str, str] = {
    "user": "sync.user",
    "queue_file": "sync.path",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SYNC_THEME,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_key(key: str) -> str:
    """Return the Rich style name for a result data key."""
    return _KEY_STYLES.get(key, "")
