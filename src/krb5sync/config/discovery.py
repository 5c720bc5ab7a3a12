"""Config file discovery.

Looks for krb5-sync.toml in the working directory, then in /etc.
Supports KRB5SYNC_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "krb5-sync.toml"
CONFIG_ENV_VAR = "KRB5SYNC_CONFIG"
SYSTEM_CONFIG_DIR = Path("/etc")


def find_config(start: Path | None = None) -> Path | None:
    """Return the first krb5-sync.toml found, or None.

    Checks KRB5SYNC_CONFIG first, then *start* (default: cwd), then /etc.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    for directory in (start or Path.cwd(), SYSTEM_CONFIG_DIR):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
