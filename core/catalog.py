"""Import and export prompt directories for prompts-cli.

Updates:
  v0.2.1 - 2026-10-19 - Overwrite existing files on export so re-exports carry label edits.
  v0.2.0 - 2026-10-15 - Count skipped duplicates and invalid entries in import summaries.
  v0.1.0 - 2026-10-10 - Export prompts as per-hash JSON files and import them back.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable as IterableABC
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

from .exceptions import InvalidPromptError, PromptIOError
from .repository import JsonPromptStore, RepositoryError
from .repository.json_store import dump_prompt_record

if TYPE_CHECKING:  # pragma: no cover - typing only
    from pathlib import Path

    from .prompt_manager import PromptManager

CatalogEntry = dict[str, Any]

logger = logging.getLogger("prompts_cli.catalog")


@dataclass(slots=True, frozen=True)
class ImportSummary:
    """Counts produced by :func:`import_prompt_directory`."""

    imported: int = 0
    skipped: int = 0
    invalid: int = 0

    def describe(self) -> str:
        """Return the human-readable summary line."""
        message = f"Imported {self.imported} prompts"
        extras: list[str] = []
        if self.skipped:
            extras.append(f"{self.skipped} skipped")
        if self.invalid:
            extras.append(f"{self.invalid} invalid")
        if extras:
            message = f"{message} ({', '.join(extras)})"
        return message


def _ensure_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, IterableABC):
        iterable = cast("IterableABC[Any]", value)
        return [str(item) for item in iterable]
    return [str(value)]


def _read_entries(path: Path) -> list[object]:
    """Return the raw records held in ``path``.

    A file may contain one record, a list of records, or ``{"prompts": [...]}``.
    """
    contents = path.read_text(encoding="utf-8")
    payload: object = json.loads(contents)
    if isinstance(payload, dict):
        mapping = cast("dict[str, object]", payload)
        prompts = mapping.get("prompts")
        if "content" not in mapping and isinstance(prompts, list):
            return list(cast("list[object]", prompts))
        return [mapping]
    if isinstance(payload, list):
        return list(cast("list[object]", payload))
    raise ValueError(f"Prompt file {path} must contain a JSON object or list")


def export_prompt_directory(manager: PromptManager, directory: Path) -> int:
    """Write every stored prompt to ``directory`` as ``<hash>.json`` files.

    Files already present for a hash are replaced with the current record.
    """
    try:
        target = JsonPromptStore(directory)
    except RepositoryError as exc:
        raise PromptIOError(f"Cannot create export directory {directory}: {exc}") from exc
    prompts = manager.load_prompts()
    written = 0
    for prompt in prompts:
        path = target.path_for(prompt.hash)
        try:
            path.write_text(dump_prompt_record(prompt), encoding="utf-8")
        except OSError as exc:
            raise PromptIOError(f"Failed to export prompt {prompt.short_hash}: {exc}") from exc
        written += 1
    logger.info("Exported prompts", extra={"count": written, "directory": str(directory)})
    return written


def import_prompt_directory(manager: PromptManager, directory: Path) -> ImportSummary:
    """Add every prompt found in ``directory``'s JSON files through ``manager``."""
    if not directory.is_dir():
        raise PromptIOError(f"Import directory not found: {directory}")

    imported = skipped = invalid = 0
    for path in sorted(directory.glob("*.json")):
        try:
            entries = _read_entries(path)
        except (OSError, ValueError) as exc:
            logger.error("Skipping unreadable prompt file %s: %s", path, exc)
            invalid += 1
            continue
        for entry in entries:
            if not isinstance(entry, dict) or not cast("CatalogEntry", entry).get("content"):
                logger.error("Skipping prompt entry without content in %s", path)
                invalid += 1
                continue
            record = cast("CatalogEntry", entry)
            try:
                result = manager.add(
                    str(record["content"]),
                    _ensure_list(record.get("tags")),
                    _ensure_list(record.get("categories")),
                )
            except InvalidPromptError as exc:
                logger.error("Skipping invalid prompt entry in %s: %s", path, exc)
                invalid += 1
                continue
            if result.added:
                imported += 1
            else:
                skipped += 1

    summary = ImportSummary(imported=imported, skipped=skipped, invalid=invalid)
    logger.info(
        "Imported prompts",
        extra={"imported": imported, "skipped": skipped, "invalid": invalid},
    )
    return summary


__all__ = ["ImportSummary", "export_prompt_directory", "import_prompt_directory"]
