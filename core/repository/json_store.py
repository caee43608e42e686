"""Directory-of-JSON-files prompt store.

Each prompt is written to ``<hash>.json`` inside the configured directory. Any other
``*.json`` file holding a prompt record is read too and keyed by its content hash.

Updates:
  v0.3.0 - 2026-10-19 - Track the files behind each hash so deletes reach foreign file names.
  v0.2.0 - 2026-10-12 - Open files exclusively so concurrent duplicate writes stay no-ops.
  v0.1.0 - 2026-10-06 - Initial file-backed store.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from models.prompt_model import Prompt

from .base import RepositoryCorruptionError, RepositoryError, logger

RECORD_SUFFIX = ".json"


def dump_prompt_record(prompt: Prompt) -> str:
    """Return the pretty-printed JSON document written for ``prompt``."""
    return json.dumps(prompt.to_record(), ensure_ascii=False, indent=2) + "\n"


class JsonPromptStore:
    """Persist prompts as individual JSON documents named by hash."""

    def __init__(self, root: str | Path) -> None:
        """Create the storage directory when it does not exist yet."""
        self._root = Path(root).expanduser()
        self._locations: dict[str, list[Path]] | None = None
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RepositoryError(f"Unable to create storage directory {self._root}") from exc

    @property
    def root(self) -> Path:
        """Return the directory holding prompt files."""
        return self._root

    def path_for(self, prompt_hash: str) -> Path:
        """Return the file path used for ``prompt_hash``."""
        return self._root / f"{prompt_hash}{RECORD_SUFFIX}"

    def save(self, prompt: Prompt) -> bool:
        """Write ``prompt`` unless a file already holds its hash."""
        locations = self._index()
        if prompt.hash in locations:
            return False
        path = self.path_for(prompt.hash)
        try:
            with path.open("x", encoding="utf-8") as handle:
                handle.write(dump_prompt_record(prompt))
        except FileExistsError:
            logger.debug("Prompt file already present; skipping write", extra={"path": str(path)})
            return False
        except OSError as exc:
            raise RepositoryError(f"Failed to write prompt {prompt.hash}") from exc
        locations[prompt.hash] = [path]
        return True

    def load_all(self) -> list[Prompt]:
        """Return every prompt decoded from ``*.json`` files in the directory.

        Several files holding the same content collapse into one record; the
        ``<hash>.json`` copy wins, otherwise the first file by name.
        """
        records, self._locations = self._scan()
        return list(records.values())

    def _scan(self) -> tuple[dict[str, Prompt], dict[str, list[Path]]]:
        try:
            candidates = sorted(self._root.glob(f"*{RECORD_SUFFIX}"))
        except OSError as exc:
            raise RepositoryError(f"Failed to scan {self._root}") from exc
        records: dict[str, Prompt] = {}
        locations: dict[str, list[Path]] = {}
        for path in candidates:
            if not path.is_file():
                continue
            prompt = self._read_prompt(path)
            paths = locations.setdefault(prompt.hash, [])
            paths.append(path)
            if prompt.hash not in records or path == self.path_for(prompt.hash):
                records[prompt.hash] = prompt
        for prompt_hash, paths in locations.items():
            if len(paths) > 1:
                logger.warning(
                    "Prompt %s is stored in %d files: %s",
                    prompt_hash[:12],
                    len(paths),
                    ", ".join(path.name for path in paths),
                )
        return records, locations

    def delete(self, prompt_hash: str) -> None:
        """Remove every file holding ``prompt_hash``; absent hashes are ignored."""
        paths = self._index().pop(prompt_hash, [])
        canonical = self.path_for(prompt_hash)
        if canonical not in paths:
            paths.append(canonical)
        try:
            for path in paths:
                path.unlink(missing_ok=True)
        except OSError as exc:
            raise RepositoryError(f"Failed to delete prompt {prompt_hash}") from exc

    def close(self) -> None:
        """File handles are scoped per call; nothing to release."""
        return

    def _index(self) -> dict[str, list[Path]]:
        if self._locations is None:
            _, self._locations = self._scan()
        return self._locations

    @staticmethod
    def _read_prompt(path: Path) -> Prompt:
        try:
            contents = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise RepositoryError(f"Failed to read prompt file {path}") from exc
        try:
            payload: Any = json.loads(contents)
        except json.JSONDecodeError as exc:
            raise RepositoryCorruptionError(f"Invalid JSON in prompt file {path}") from exc
        if not isinstance(payload, dict):
            raise RepositoryCorruptionError(f"Prompt file {path} must contain a JSON object")
        try:
            return Prompt.from_record(payload)
        except ValueError as exc:
            raise RepositoryCorruptionError(f"{exc} ({path})") from exc


__all__ = ["JsonPromptStore", "RECORD_SUFFIX", "dump_prompt_record"]
