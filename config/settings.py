"""Settings management utilities for prompts-cli configuration.

Updates:
  v0.3.0 - 2026-10-13 - Accept TOML config files and storage directories passed via --config.
  v0.2.0 - 2026-10-09 - Resolve config files from flag, environment, then platform directory.
  v0.1.0 - 2026-10-06 - Introduce pydantic settings with nested storage backend options.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

APP_VERSION = "0.3.0"
APP_DIR_NAME = "prompts-cli"
CONFIG_ENV_VAR = "PROMPTS_CLI_CONFIG"
CONFIG_FILE_NAMES: tuple[str, ...] = ("config.toml", "config.json")

DEFAULT_STORAGE_TYPE = "json"
STORAGE_TYPE_ALIASES: dict[str, str] = {
    "json": "json",
    "file": "json",
    "sqlite": "sqlite",
    "sqlite3": "sqlite",
    "libsql": "sqlite",
    "sql": "sqlite",
    "db": "sqlite",
}

StorageType = Literal["json", "sqlite"]

logger = logging.getLogger("prompts_cli.settings")


class SettingsError(Exception):
    """Raised when prompts-cli configuration cannot be loaded or validated."""


def default_config_dir() -> Path:
    """Return the per-user prompts-cli configuration directory for this platform."""
    if sys.platform.startswith("win"):
        appdata = os.getenv("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        xdg = os.getenv("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_DIR_NAME


class StorageSettings(BaseModel):
    """Storage backend selection."""

    type: StorageType = Field(default=DEFAULT_STORAGE_TYPE)
    path: Path | None = Field(
        default=None,
        description="Prompt directory (json) or database file (sqlite).",
    )

    @field_validator("type", mode="before")
    def _normalise_type(cls, value: Any) -> Any:
        """Map backend aliases such as ``libsql`` onto canonical names."""
        if value is None:
            return DEFAULT_STORAGE_TYPE
        if isinstance(value, str):
            key = value.strip().lower()
            return STORAGE_TYPE_ALIASES.get(key, key)
        return value

    @field_validator("path", mode="before")
    def _normalise_path(cls, value: Any) -> Path | None:
        """Expand user-relative paths; blank values mean the default location."""
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        return Path(text).expanduser().resolve()


class PromptsCliSettings(BaseSettings):
    """Application configuration sourced from a config file or environment variables."""

    storage: StorageSettings = Field(default_factory=StorageSettings)
    config_path: Path | None = Field(
        default=None,
        description="Configuration file the settings were loaded from, if any.",
    )

    model_config = SettingsConfigDict(
        env_prefix="PROMPTS_CLI_",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Keyword arguments; :func:`load_settings` merges the config file
               beneath explicit overrides here.
            2. Environment variables / aliases.
            3. File secrets.
        """

        def env_with_aliases(_: BaseSettings | None = None) -> dict[str, Any]:
            config_dict = cast("dict[str, Any]", cls.model_config)
            prefix = str(config_dict.get("env_prefix", ""))

            def _lookup(candidate: str) -> str | None:
                value = os.getenv(candidate)
                if value is None:
                    return None
                stripped_value = value.strip()
                return stripped_value or None

            mapping = {
                "type": ["STORAGE_TYPE", "STORAGE__TYPE"],
                "path": ["STORAGE_PATH", "STORAGE__PATH"],
            }
            storage: dict[str, Any] = {}
            for field, keys in mapping.items():
                for key in keys:
                    value = _lookup(f"{prefix}{key}")
                    if value is not None:
                        storage[field] = value
                        break
            return {"storage": storage} if storage else {}

        return (
            init_settings,
            cast("PydanticBaseSettingsSource", env_with_aliases),
            file_secret_settings,
        )


def resolve_config_path(explicit: str | Path | None = None) -> Path | None:
    """Return the configuration file (or storage directory) to load.

    An explicit path wins, then ``PROMPTS_CLI_CONFIG``, then ``config.toml`` or
    ``config.json`` in the platform directory. Explicit paths must exist; a missing
    default simply means built-in defaults apply.
    """
    for candidate, source in ((explicit, "--config"), (os.getenv(CONFIG_ENV_VAR), CONFIG_ENV_VAR)):
        if candidate is None or not str(candidate).strip():
            continue
        path = Path(str(candidate).strip()).expanduser()
        if not path.exists():
            raise SettingsError(f"Configuration file not found: {path} (from {source})")
        return path

    config_dir = default_config_dir()
    for name in CONFIG_FILE_NAMES:
        path = config_dir / name
        if path.is_file():
            return path
    return None


def _parse_config_text(path: Path, contents: str) -> object:
    if path.suffix.lower() == ".json":
        try:
            return json.loads(contents)
        except json.JSONDecodeError as exc:
            raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
    try:
        return tomllib.loads(contents)
    except tomllib.TOMLDecodeError as exc:
        raise SettingsError(f"Invalid TOML in configuration file: {path}: {exc}") from exc


def read_config_file(path: Path) -> dict[str, Any]:
    """Return settings data read from ``path``.

    A directory is treated as a JSON storage root. Relative storage paths in a
    file are resolved against the file's directory.
    """
    if path.is_dir():
        return {"storage": {"type": "json", "path": str(path.resolve())}}
    try:
        raw_contents = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Unable to read configuration file: {path}") from exc
    data = _parse_config_text(path, raw_contents)
    if not isinstance(data, dict):
        raise SettingsError(f"Configuration file {path} must contain a table or JSON object")

    data_dict = {str(key): value for key, value in cast("Mapping[object, Any]", data).items()}
    storage: dict[str, Any] = {}
    section = data_dict.get("storage")
    if isinstance(section, Mapping):
        entries = cast("Mapping[object, Any]", section)
        storage.update({str(key): value for key, value in entries.items()})
    elif section is not None:
        raise SettingsError(f"'storage' in {path} must be a table")
    if "storage_type" in data_dict and "type" not in storage:
        storage["type"] = data_dict["storage_type"]
    if "storage_path" in data_dict and "path" not in storage:
        storage["path"] = data_dict["storage_path"]

    raw_path = storage.get("path")
    if isinstance(raw_path, str) and raw_path.strip():
        storage_path = Path(raw_path.strip()).expanduser()
        if not storage_path.is_absolute():
            storage_path = path.resolve().parent / storage_path
        storage["path"] = str(storage_path)

    ignored = sorted(set(data_dict) - {"storage", "storage_type", "storage_path"})
    if ignored:
        logger.warning(
            "Ignoring unknown key(s) %s in configuration file %s", ", ".join(ignored), path
        )
    return {"storage": storage} if storage else {}


def _merge_settings_data(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge_settings_data(
                cast("Mapping[str, Any]", current),
                cast("Mapping[str, Any]", value),
            )
        else:
            merged[key] = value
    return merged


def _format_validation_error(exc: ValidationError) -> str:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        details.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(details)


def load_settings(config_path: str | Path | None = None, **overrides: Any) -> PromptsCliSettings:
    """Return validated settings, raising SettingsError on failure.

    ``overrides`` beat the config file, which beats environment variables.
    Flat ``storage_type`` / ``storage_path`` overrides are accepted.
    """
    resolved = resolve_config_path(config_path)
    file_data = read_config_file(resolved) if resolved is not None else {}

    storage_override: dict[str, Any] = {}
    storage_value = overrides.pop("storage", None)
    if isinstance(storage_value, StorageSettings):
        storage_override.update(storage_value.model_dump(exclude_unset=True))
    elif isinstance(storage_value, Mapping):
        storage_override.update(cast("Mapping[str, Any]", storage_value))
    if "storage_type" in overrides:
        storage_override["type"] = overrides.pop("storage_type")
    if "storage_path" in overrides:
        storage_override["path"] = overrides.pop("storage_path")
    if storage_override:
        overrides["storage"] = storage_override

    data = _merge_settings_data(file_data, overrides)
    data.setdefault("config_path", resolved)
    try:
        settings = PromptsCliSettings(**data)
    except ValidationError as exc:
        message = _format_validation_error(exc)
        raise SettingsError(f"Invalid prompts-cli configuration: {message}") from exc
    logger.debug(
        "Settings loaded",
        extra={
            "config_path": str(resolved) if resolved else None,
            "storage": settings.storage.type,
        },
    )
    return settings
