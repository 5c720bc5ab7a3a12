"""Tests for local directory plugin discovery in PluginManager."""

from __future__ import annotations

from pathlib import Path

from krb5sync.plugins.manager import PluginManager

# -- Plugin source code used in tests ------------------------------------------

_BACKEND_PLUGIN_SRC = """\
import pluggy

from krb5sync.plugins.backend import BackendStatus, SyncBackend

hookimpl = pluggy.HookimplMarker("krb5sync")


class LocalBackend(SyncBackend):
    def init(self, context):
        return "state"

    def change_password(self, state, context, principal, password):
        return BackendStatus(0)

    def change_status(self, state, context, principal, enabled):
        return BackendStatus(0)


class LocalBackendPlugin:
    @hookimpl
    def register_backends(self):
        return {"local-ad": LocalBackend}
"""

_SYNTAX_ERROR_SRC = """\
def broken(
    # missing closing paren and colon
"""

_NO_HOOKS_SRC = """\
class PlainClass:
    def hello(self) -> str:
        return "world"
"""


class TestLocalDiscovery:
    def test_discovers_local_backend(self, tmp_path: Path) -> None:
        (tmp_path / "mybackend.py").write_text(_BACKEND_PLUGIN_SRC, encoding="utf-8")

        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path, entry_point_group="krb5sync.none")

        assert "krb5sync_local_plugin_mybackend" in names
        assert pm.backend_names() == ["local-ad"]

    def test_skips_bad_plugin_gracefully(self, tmp_path: Path) -> None:
        (tmp_path / "broken.py").write_text(_SYNTAX_ERROR_SRC, encoding="utf-8")

        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path, entry_point_group="krb5sync.none")
        assert names == []

    def test_ignores_classes_without_hooks(self, tmp_path: Path) -> None:
        (tmp_path / "plain.py").write_text(_NO_HOOKS_SRC, encoding="utf-8")

        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path, entry_point_group="krb5sync.none")
        assert names == []

    def test_skips_underscore_files(self, tmp_path: Path) -> None:
        (tmp_path / "_private.py").write_text(_BACKEND_PLUGIN_SRC, encoding="utf-8")

        pm = PluginManager()
        pm.discover_and_load(local_dir=tmp_path, entry_point_group="krb5sync.none")
        assert pm.backend_names() == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        pm = PluginManager()
        names = pm.discover_and_load(
            local_dir=tmp_path / "absent", entry_point_group="krb5sync.none"
        )
        assert names == []
