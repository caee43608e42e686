"""Prompt storage backends.

Updates:
  v0.2.0 - 2026-10-11 - Add SQLite backend alongside the JSON directory store.
  v0.1.0 - 2026-10-06 - Package scaffold with shared helpers and JSON store.
"""

from __future__ import annotations

from .base import PromptStore, RepositoryCorruptionError, RepositoryError
from .json_store import JsonPromptStore
from .sqlite_store import SQLitePromptStore

__all__ = [
    "JsonPromptStore",
    "PromptStore",
    "RepositoryCorruptionError",
    "RepositoryError",
    "SQLitePromptStore",
]
