"""Configuration helpers for prompts-cli.

Updates: v0.2.0 - 2026-10-09 - Expose config path resolution and platform directory helpers.
Updates: v0.1.0 - 2026-10-06 - Expose settings loader and configuration error types.
"""

from .settings import (
    APP_VERSION,
    CONFIG_ENV_VAR,
    DEFAULT_STORAGE_TYPE,
    PromptsCliSettings,
    SettingsError,
    StorageSettings,
    default_config_dir,
    load_settings,
    read_config_file,
    resolve_config_path,
)

__all__ = [
    "APP_VERSION",
    "CONFIG_ENV_VAR",
    "DEFAULT_STORAGE_TYPE",
    "PromptsCliSettings",
    "SettingsError",
    "StorageSettings",
    "default_config_dir",
    "load_settings",
    "read_config_file",
    "resolve_config_path",
]
