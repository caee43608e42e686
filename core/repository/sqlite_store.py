"""SQLite-backed prompt store.

Rows are matched on the digest of their ``content`` as well as the ``hash``
column, so rows written by other tools with a different key stay reachable.

Updates:
  v0.3.0 - 2026-10-19 - Match rows by content digest when saving, loading and deleting.
  v0.2.0 - 2026-10-11 - Implement load/delete parity with the JSON store.
  v0.1.0 - 2026-10-06 - Initial schema bootstrap and insert support.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from models.prompt_model import Prompt, compute_prompt_hash

from .base import (
    RepositoryError,
    ensure_directory as _ensure_directory,
    json_dumps as _json_dumps,
    json_loads_list as _json_loads_list,
    logger,
    open_connection as _open_connection,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

_SCHEMA = """
CREATE TABLE IF NOT EXISTS prompts (
    hash TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    tags TEXT,
    categories TEXT
);
"""

_INSERT = """
INSERT OR IGNORE INTO prompts (hash, content, tags, categories)
SELECT :hash, :content, :tags, :categories
WHERE NOT EXISTS (SELECT 1 FROM prompts WHERE content = :content);
"""

# rows keyed by their own digest sort first so they win over stale copies
_SELECT_ALL = """
SELECT hash, content, tags, categories FROM prompts
ORDER BY hash = prompt_hash(content) DESC, rowid;
"""

_DELETE = "DELETE FROM prompts WHERE hash = :hash OR prompt_hash(content) = :hash;"


class SQLitePromptStore:
    """Persist prompts in a single ``prompts`` table keyed by hash."""

    def __init__(self, db_path: str | Path) -> None:
        """Initialise repository storage and ensure the schema exists."""
        self._db_path = Path(db_path).expanduser()
        try:
            _ensure_directory(self._db_path)
        except OSError as exc:
            raise RepositoryError(f"Unable to create directory for {self._db_path}") from exc
        try:
            with self._connection() as conn:
                conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to initialise SQLite schema") from exc

    @property
    def db_path(self) -> Path:
        """Return the database file location."""
        return self._db_path

    def save(self, prompt: Prompt) -> bool:
        """Insert ``prompt`` unless a row already holds the same hash or content."""
        try:
            with self._connection() as conn:
                cursor = conn.execute(_INSERT, self._prompt_to_row(prompt))
                inserted = cursor.rowcount > 0
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to insert prompt {prompt.hash}") from exc
        return inserted

    def load_all(self) -> list[Prompt]:
        """Return all stored prompts, one per content hash."""
        try:
            with self._connection() as conn:
                rows = conn.execute(_SELECT_ALL).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to fetch prompt list") from exc
        prompts: dict[str, Prompt] = {}
        for row in rows:
            prompt = self._row_to_prompt(row)
            if prompt.hash in prompts:
                logger.warning(
                    "Ignoring duplicate row %s for prompt %s", row["hash"], prompt.short_hash
                )
                continue
            prompts[prompt.hash] = prompt
        return list(prompts.values())

    def delete(self, prompt_hash: str) -> None:
        """Delete every row keyed by, or whose content digests to, ``prompt_hash``."""
        try:
            with self._connection() as conn:
                conn.execute(_DELETE, {"hash": prompt_hash})
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete prompt {prompt_hash}") from exc

    def close(self) -> None:
        """Connections are opened per operation; nothing to release."""
        return

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        with _open_connection(self._db_path) as conn:
            conn.create_function("prompt_hash", 1, compute_prompt_hash, deterministic=True)
            yield conn

    @staticmethod
    def _prompt_to_row(prompt: Prompt) -> dict[str, str | None]:
        return {
            "hash": prompt.hash,
            "content": prompt.content,
            "tags": _json_dumps(list(prompt.tags)),
            "categories": _json_dumps(list(prompt.categories)),
        }

    @staticmethod
    def _row_to_prompt(row: sqlite3.Row) -> Prompt:
        return Prompt(
            content=row["content"],
            tags=tuple(_json_loads_list(row["tags"])),
            categories=tuple(_json_loads_list(row["categories"])),
        )


__all__ = ["SQLitePromptStore"]
