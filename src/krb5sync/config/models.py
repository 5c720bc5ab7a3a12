"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, krb5-sync.toml only contains
overrides. Most sites need nothing beyond ``[backend] options``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class BackendConfig(BaseModel):
    """[backend] section."""

    model_config = {"frozen": True}

    name: str = "ad"
    error_text_limit: int = Field(default=8192, gt=0)
    options: dict[str, Any] = Field(default_factory=dict)


class QueueConfig(BaseModel):
    """[queue] section."""

    model_config = {"frozen": True}

    max_line_length: int = Field(default=8192, gt=1)


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    syslog: bool = True
    syslog_address: str = "/dev/log"
    facility: str = "auth"
    ident: str = "krb5-sync"


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    local_dir: Path | None = None
    entry_point_group: str = "krb5sync.plugins"
