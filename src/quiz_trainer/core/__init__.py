"""Core shared helpers for the quiz trainer."""

from __future__ import annotations

from .config import (
    ConfigError,
    TrainerConfig,
    load_config,
    load_toml,
    merge_defaults,
    resolve_config_path,
)
from .logging import JsonLogFormatter, configure_logger
from .workspace import (
    WORKSPACE_ENV,
    WorkspaceError,
    WorkspaceLayout,
    ensure_workspace,
)

__all__ = [
    "ConfigError",
    "TrainerConfig",
    "load_config",
    "load_toml",
    "merge_defaults",
    "resolve_config_path",
    "configure_logger",
    "JsonLogFormatter",
    "ensure_workspace",
    "WorkspaceLayout",
    "WorkspaceError",
    "WORKSPACE_ENV",
]
