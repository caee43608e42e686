"""Shared CLI utility functions for prompts-cli commands.

Updates:
  v0.1.0 - 2026-10-08 - Extract stdout logging, list parsing, and JSON rendering helpers.
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Iterable
    from logging import Logger
    from pathlib import Path

    from models.prompt_model import Prompt


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def split_csv(value: str) -> list[str]:
    """Split a comma-separated option value, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def dump_json(payload: Any) -> str:
    """Return *payload* as pretty-printed JSON text."""
    return json.dumps(payload, ensure_ascii=False, indent=2)


def prompts_to_json(prompts: Iterable[Prompt]) -> str:
    """Return *prompts* rendered as a JSON array of records."""
    return dump_json([prompt.to_record() for prompt in prompts])


def read_prompt_text(message: str | None = "Enter the prompt text:") -> str:
    """Optionally prompt on stdout and return trimmed text read from stdin until EOF."""
    if message:
        print(message)
    return sys.stdin.read().strip()


def describe_path(path: Path | None, *, expect_directory: bool) -> str:
    """Annotate a storage location with whether the backend can use it as is."""
    if path is None:
        return "not set"
    location = path.expanduser()
    if not location.exists():
        return f"{location} (missing - created on demand)"
    if location.is_dir() != expect_directory:
        wanted = "directory" if expect_directory else "file"
        return f"{location} (unusable: expected a {wanted})"
    return f"{location} (exists)"
