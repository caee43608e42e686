"""Shared storage protocol, helpers, and error hierarchy.

Updates:
  v0.2.0 - 2026-10-10 - Add ``PromptStore`` protocol shared by JSON and SQLite backends.
  v0.1.0 - 2026-10-05 - Extract logger, helpers, and exceptions for prompt stores.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Protocol, cast

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from models.prompt_model import Prompt

logger = logging.getLogger("prompts_cli.repository")


class RepositoryError(Exception):
    """Base exception for repository failures."""


class RepositoryCorruptionError(RepositoryError):
    """Raised when a stored record cannot be decoded."""


class PromptStore(Protocol):
    """Uniform save/load/delete contract implemented by every backend."""

    def save(self, prompt: Prompt) -> bool:
        """Persist ``prompt``; return False without writing when the hash exists."""
        ...

    def load_all(self) -> list[Prompt]:
        """Return every stored prompt in unspecified order."""
        ...

    def delete(self, prompt_hash: str) -> None:
        """Remove the record keyed by ``prompt_hash``; absent keys are ignored."""
        ...

    def close(self) -> None:
        """Release backend resources."""
        ...


def ensure_directory(path: Path) -> None:
    """Ensure the parent directory for a database file exists."""
    path.parent.mkdir(parents=True, exist_ok=True)


def connect(db_path: Path) -> sqlite3.Connection:
    """Return a configured SQLite connection."""
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode = WAL;")
    conn.execute("PRAGMA synchronous = NORMAL;")
    return conn


@contextmanager
def open_connection(db_path: Path) -> Iterator[sqlite3.Connection]:
    """Yield a connection that commits on success and is always closed."""
    conn = connect(db_path)
    try:
        with conn:
            yield conn
    finally:
        conn.close()


def json_dumps(value: Any | None) -> str | None:
    """Serialize arbitrary values to JSON strings (or None)."""
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)


def json_loads_list(value: str | None) -> list[str]:
    """Deserialize JSON-encoded lists stored in SQLite into Python lists."""
    if value is None:
        return []
    if value in ("", "null"):
        return []
    try:
        parsed: object = json.loads(value)
    except json.JSONDecodeError as exc:
        raise RepositoryCorruptionError(f"Invalid JSON array in column: {value!r}") from exc
    if isinstance(parsed, list):
        entries = cast("Sequence[object]", parsed)
        return [str(item) for item in entries]
    return [str(parsed)]


__all__ = [
    "PromptStore",
    "RepositoryCorruptionError",
    "RepositoryError",
    "connect",
    "ensure_directory",
    "json_dumps",
    "json_loads_list",
    "logger",
    "open_connection",
]
