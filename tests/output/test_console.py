"""Tests for the Rich console factory."""

from krb5sync.output.console import SYNC_THEME, create_console, get_output, style_for_key


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("[sync.ok]OK[/]")
        assert get_output(console) == "OK\n"

    def test_long_lines_not_wrapped(self) -> None:
        console = create_console(no_color=True, width=20)
        console.print("x" * 50)
        assert get_output(console) == "x" * 50 + "\n"

    def test_theme_styles(self) -> None:
        assert "sync.error" in SYNC_THEME.styles

    def test_style_for_key(self) -> None:
        assert style_for_key("user") == "sync.user"
        assert style_for_key("mode") == ""
