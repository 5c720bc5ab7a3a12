"""Shared pytest fixtures and fakes for krb5sync tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pluggy
import pytest
from click.testing import CliRunner

from krb5sync.config.settings import Krb5SyncSettings
from krb5sync.domain.errors import KerberosError
from krb5sync.infrastructure.session import SyncSession
from krb5sync.plugins.backend import BackendStatus, SyncBackend
from krb5sync.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("krb5sync")


@pytest.fixture(autouse=True)
def _hermetic_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None]:
    """Keep config discovery and syslog away from the host system.

    Also restores root logger state, since every CLI run reconfigures it.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("KRB5SYNC_CONFIG", raising=False)
    monkeypatch.setattr("krb5sync.config.discovery.SYSTEM_CONFIG_DIR", tmp_path / "etc")
    monkeypatch.setenv("KRB5SYNC_LOGGING__SYSLOG", "false")

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("krb5sync")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeKerberosContext:
    """Parses any name except those listed in ``rejected``."""

    def __init__(self, rejected: set[str] | None = None) -> None:
        self.rejected = rejected or set()
        self.parsed: list[str] = []

    def parse_name(self, text: str) -> Any:
        self.parsed.append(text)
        if text in self.rejected:
            raise KerberosError("Malformed representation of principal")
        return ("principal", text)


@dataclass
class FakeDirectory:
    """Records backend calls and hands out scripted statuses."""

    password_status: BackendStatus = field(default_factory=lambda: BackendStatus(0))
    status_status: BackendStatus = field(default_factory=lambda: BackendStatus(0))
    init_error: Exception | None = None
    calls: list[tuple[Any, ...]] = field(default_factory=list)
    init_count: int = 0


class FakeBackend(SyncBackend):
    """SyncBackend whose behavior comes from a :class:`FakeDirectory`."""

    directory: FakeDirectory

    def init(self, context: Any) -> Any:
        self.directory.init_count += 1
        if self.directory.init_error is not None:
            raise self.directory.init_error
        return {"bound": True, "options": self.options}

    def change_password(
        self, state: Any, context: Any, principal: Any, password: bytes
    ) -> BackendStatus:
        self.directory.calls.append(("password", principal.text, password, len(password)))
        return self.directory.password_status

    def change_status(
        self, state: Any, context: Any, principal: Any, enabled: bool
    ) -> BackendStatus:
        self.directory.calls.append(("status", principal.text, enabled))
        return self.directory.status_status


class FakePlugin:
    """Supplies the fake backend under ``ad`` and the fake Kerberos context."""

    def __init__(self, backend_cls: type[SyncBackend], context: FakeKerberosContext) -> None:
        self._backend_cls = backend_cls
        self._context = context

    @hookimpl
    def register_backends(self) -> dict[str, type[SyncBackend]]:
        return {"ad": self._backend_cls}

    @hookimpl
    def create_kerberos_context(self, settings: Krb5SyncSettings) -> FakeKerberosContext:
        return self._context


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory()


@pytest.fixture
def kerberos() -> FakeKerberosContext:
    return FakeKerberosContext()


@pytest.fixture
def plugins(directory: FakeDirectory, kerberos: FakeKerberosContext) -> PluginManager:
    """PluginManager wired to the fake backend and Kerberos context."""
    backend_cls = type("BoundFakeBackend", (FakeBackend,), {"directory": directory})
    pm = PluginManager()
    pm.register_plugin(FakePlugin(backend_cls, kerberos), name="fake")
    return pm


@pytest.fixture
def settings() -> Krb5SyncSettings:
    return Krb5SyncSettings.from_cli()


@pytest.fixture
def session(settings: Krb5SyncSettings, plugins: PluginManager) -> SyncSession:
    return SyncSession.open(settings, plugins)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_queue_file(directory: Path, content: bytes, name: str = "queue") -> Path:
    """Write a queue file and return its path."""
    path = directory / name
    path.write_bytes(content)
    return path
