"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
Directory backends arrive exclusively through plugins.
"""

from krb5sync.plugins.backend import BackendStatus, SyncBackend
from krb5sync.plugins.manager import PluginManager

__all__ = ["BackendStatus", "PluginManager", "SyncBackend"]
