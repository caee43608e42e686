"""Factories for constructing PromptManager instances from validated settings.

Updates:
  v0.2.0 - 2026-10-11 - Register SQLite backend and accept libsql/sql/db aliases.
  v0.1.0 - 2026-10-07 - Build JSON-backed managers from settings.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from config.settings import STORAGE_TYPE_ALIASES, default_config_dir

from .exceptions import ConfigurationError, PromptStorageError
from .prompt_manager import PromptManager
from .repository import JsonPromptStore, PromptStore, RepositoryError, SQLitePromptStore

if TYPE_CHECKING:  # pragma: no cover - typing only
    from config import PromptsCliSettings

factory_logger = logging.getLogger("prompts_cli.factory")

StoreBuilder = Callable[[Path], PromptStore]

_BACKENDS: dict[str, StoreBuilder] = {
    "json": JsonPromptStore,
    "sqlite": SQLitePromptStore,
}

_DEFAULT_LOCATIONS: dict[str, str] = {
    "json": "prompts",
    "sqlite": "prompts.db",
}


def canonical_storage_type(storage_type: str) -> str:
    """Return the registered backend name for ``storage_type`` or raise ConfigurationError."""
    key = (storage_type or "").strip().lower()
    canonical = STORAGE_TYPE_ALIASES.get(key, key)
    if canonical not in _BACKENDS:
        known = ", ".join(sorted(STORAGE_TYPE_ALIASES))
        raise ConfigurationError(
            f"Unknown storage type '{storage_type}' (expected one of: {known})"
        )
    return canonical


def default_storage_path(storage_type: str) -> Path:
    """Return the default prompt location for ``storage_type``."""
    canonical = canonical_storage_type(storage_type)
    return default_config_dir() / _DEFAULT_LOCATIONS[canonical]


def build_prompt_store(storage_type: str, path: Path | str | None = None) -> PromptStore:
    """Return the storage backend registered for ``storage_type`` rooted at ``path``."""
    canonical = canonical_storage_type(storage_type)
    location = Path(path).expanduser() if path is not None else default_storage_path(canonical)
    try:
        store = _BACKENDS[canonical](location)
    except RepositoryError as exc:
        raise PromptStorageError(
            f"Unable to open {canonical} storage at {location}: {exc}"
        ) from exc
    factory_logger.debug(
        "Prompt store ready",
        extra={"storage_type": canonical, "storage_path": str(location)},
    )
    return store


def build_prompt_manager(settings: PromptsCliSettings) -> PromptManager:
    """Return a PromptManager wired to the storage configured in ``settings``."""
    store = build_prompt_store(settings.storage.type, settings.storage.path)
    return PromptManager(store)


__all__ = [
    "build_prompt_manager",
    "build_prompt_store",
    "canonical_storage_type",
    "default_storage_path",
]
