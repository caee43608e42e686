"""Prompt data model definitions.

Updates: v0.3.0 - 2026-10-12 - Accept null tag/category payloads from older exports.
Updates: v0.2.0 - 2026-10-08 - Derive the content hash on construction and expose short hashes.
Updates: v0.1.0 - 2026-10-05 - Initial Prompt schema with serialization helpers.
"""
from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

SHORT_HASH_LENGTH = 12


def compute_prompt_hash(content: str) -> str:
    """Return the stable SHA-256 hex digest used as a prompt's primary key."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def short_hash(value: str) -> str:
    """Return the display prefix of a prompt hash."""
    return value[:SHORT_HASH_LENGTH]


def normalise_labels(items: Iterable[Any] | str | None) -> tuple[str, ...]:
    """Coerce tag/category inputs into a trimmed, de-duplicated tuple.

    First-seen order is preserved so merged edits stay predictable.
    """
    if items is None:
        return ()
    if isinstance(items, str):
        items = [items]
    labels: list[str] = []
    seen: set[str] = set()
    for raw in items:
        if raw is None:
            continue
        text = str(raw).strip()
        if not text or text in seen:
            continue
        seen.add(text)
        labels.append(text)
    return tuple(labels)


def _deserialize_labels(value: Any) -> tuple[str, ...]:
    """Accept JSON-encoded strings, lists, or null for stored label fields."""
    if value is None:
        return ()
    if isinstance(value, str):
        if value in ("", "null"):
            return ()
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            return normalise_labels([value])
        if isinstance(parsed, list):
            return normalise_labels(parsed)
        return normalise_labels([parsed])
    if isinstance(value, (list, tuple, set)):
        return normalise_labels(value)
    return normalise_labels([value])


@dataclass(slots=True, frozen=True)
class Prompt:
    """Content-addressed prompt record.

    ``hash`` is always derived from ``content``; use :func:`dataclasses.replace`
    to produce an edited copy with a recomputed hash.
    """

    content: str
    tags: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    hash: str = field(init=False)

    def __post_init__(self) -> None:
        """Normalise label collections and derive the content hash."""
        object.__setattr__(self, "tags", normalise_labels(self.tags))
        object.__setattr__(self, "categories", normalise_labels(self.categories))
        object.__setattr__(self, "hash", compute_prompt_hash(self.content))

    @property
    def short_hash(self) -> str:
        """Return the 12-character hash prefix shown in CLI output."""
        return short_hash(self.hash)

    @property
    def title(self) -> str:
        """Return the first non-empty content line for compact listings."""
        for line in self.content.splitlines():
            stripped = line.strip()
            if stripped:
                return stripped
        return ""

    def has_tags(self, required: Iterable[str]) -> bool:
        """Return True when every label in ``required`` is present in ``tags``."""
        return set(normalise_labels(required)).issubset(self.tags)

    def has_categories(self, required: Iterable[str]) -> bool:
        """Return True when every label in ``required`` is present in ``categories``."""
        return set(normalise_labels(required)).issubset(self.categories)

    def to_record(self) -> dict[str, Any]:
        """Return a plain dictionary representation for JSON persistence."""
        return {
            "content": self.content,
            "tags": list(self.tags),
            "categories": list(self.categories),
            "hash": self.hash,
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Prompt:
        """Create a Prompt from a dictionary record.

        A stored ``hash`` value is ignored; the key is recomputed from content.
        """
        if "content" not in data or data["content"] is None:
            raise ValueError("Prompt records must include 'content'")
        return cls(
            content=str(data["content"]),
            tags=_deserialize_labels(data.get("tags")),
            categories=_deserialize_labels(data.get("categories")),
        )


__all__ = [
    "Prompt",
    "SHORT_HASH_LENGTH",
    "compute_prompt_hash",
    "normalise_labels",
    "short_hash",
]
