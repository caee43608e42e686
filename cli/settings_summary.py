"""Printable summaries for prompts-cli configuration.

Updates:
  v0.1.0 - 2026-10-09 - Render storage backend and config source summary.
"""

from __future__ import annotations

from config import CONFIG_ENV_VAR, PromptsCliSettings, default_config_dir
from core.factory import default_storage_path

from .utils import describe_path


def print_settings_summary(settings: PromptsCliSettings) -> None:
    """Emit a readable summary of the resolved configuration."""
    storage = settings.storage
    storage_path = storage.path or default_storage_path(storage.type)
    path_desc = describe_path(storage_path, expect_directory=storage.type == "json")
    config_source = (
        str(settings.config_path) if settings.config_path else "defaults (no file found)"
    )

    lines = [
        "prompts-cli configuration summary",
        "---------------------------------",
        f"Config source: {config_source}",
        f"Config directory: {default_config_dir()}",
        f"Config override variable: {CONFIG_ENV_VAR}",
        "",
        "Storage",
        "-------",
        f"Backend: {storage.type}",
        f"Location: {path_desc}",
    ]
    print("\n".join(lines))
