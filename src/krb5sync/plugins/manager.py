"""Plugin discovery, backend registry, and Kerberos context creation.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus single-file plugins from an optional local directory.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pluggy

from krb5sync.domain.errors import KerberosError, PluginError
from krb5sync.plugins.backend import SyncBackend
from krb5sync.plugins.hookspecs import Krb5SyncHookSpec

if TYPE_CHECKING:
    from krb5sync.config.settings import Krb5SyncSettings
    from krb5sync.infrastructure.kerberos import KerberosContext

PROJECT_NAME = "krb5sync"
DEFAULT_ENTRY_POINT_GROUP = "krb5sync.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, the backend registry, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(Krb5SyncHookSpec)
        self._backends: dict[str, type[SyncBackend]] = {}
        self._loaded: bool = False

    def discover_and_load(
        self,
        *,
        local_dir: Path | None = None,
        entry_point_group: str = DEFAULT_ENTRY_POINT_GROUP,
    ) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(entry_point_group)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._register_backends()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._register_plugin_backends(plugin, resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    def backend_names(self) -> list[str]:
        """Names of all registered backends, sorted."""
        if not self._loaded:
            self._register_backends()
        return sorted(self._backends)

    def create_backend(self, name: str, **options: object) -> SyncBackend:
        """Instantiate the backend registered under *name*."""
        known = self.backend_names()
        backend_cls = self._backends.get(name)
        if backend_cls is None:
            msg = f"no backend registered under {name!r} (available: {', '.join(known) or 'none'})"
            raise PluginError(msg, backend=name)
        try:
            return backend_cls(**options)
        except Exception as exc:
            msg = f"cannot construct backend {name!r}: {exc}"
            raise PluginError(msg, backend=name) from exc

    def create_kerberos_context(self, settings: Krb5SyncSettings) -> KerberosContext:
        """Ask plugins for the Kerberos context; the first answer wins."""
        context = self._pm.hook.create_kerberos_context(settings=settings)
        if context is None:
            msg = "cannot initialize Kerberos context: no provider registered"
            raise KerberosError(msg)
        return context

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes inside the module that carry pluggy hookimpl-decorated
        methods are instantiated and registered. Broken files are logged and
        skipped.
        """
        if not local_dir.is_dir():
            logger.warning("Local plugin directory %s does not exist", local_dir)
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"krb5sync_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue
                if not self._has_hook_impls(obj):
                    continue
                try:
                    self.register_plugin(obj(), name=module_name)
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    def _register_backends(self) -> None:
        # Registration order, so that the earliest plugin keeps a contested name.
        for plugin_name, plugin in self._pm.list_name_plugin():
            if plugin is None:
                continue
            self._register_plugin_backends(plugin, plugin_name)

    def _register_plugin_backends(self, plugin: object, plugin_name: str) -> None:
        """Collect the backends exposed by a single plugin instance.

        The first plugin to claim a backend name keeps it.
        """
        hook = getattr(plugin, "register_backends", None)
        if hook is None:
            return

        try:
            backend_map = hook()
        except Exception:
            logger.warning(
                "Failed to collect backends from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return

        if backend_map is None:
            return
        if not isinstance(backend_map, dict):
            logger.warning("Plugin %s returned non-dict backend registrations", plugin_name)
            return

        for backend_name, backend_cls in backend_map.items():
            if not (inspect.isclass(backend_cls) and issubclass(backend_cls, SyncBackend)):
                logger.warning(
                    "Skipping backend %r from plugin %s: not a SyncBackend subclass",
                    backend_name,
                    plugin_name,
                )
                continue
            existing = self._backends.get(backend_name)
            if existing is not None and existing is not backend_cls:
                logger.warning(
                    "Backend %r from plugin %s ignored: already provided by %s",
                    backend_name,
                    plugin_name,
                    existing.__qualname__,
                )
                continue
            self._backends[backend_name] = backend_cls
            logger.debug("Registered backend %r from plugin %s", backend_name, plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("krb5sync")`` sets a ``krb5sync_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "krb5sync_impl", None):
                return True
        return False
