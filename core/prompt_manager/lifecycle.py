"""Prompt lifecycle helpers for prompts-cli.

Updates:
  v0.2.0 - 2026-10-12 - Reject content edits that collide with another stored prompt.
  v0.1.0 - 2026-10-08 - Extract add/edit/delete orchestration into mixin.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from models.prompt_model import Prompt, normalise_labels

from ..exceptions import (
    InvalidPromptError,
    PromptNotFoundError,
    PromptSerializationError,
    PromptStorageError,
)
from ..repository import RepositoryCorruptionError, RepositoryError

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Iterable

    from ..repository import PromptStore

logger = logging.getLogger("prompts_cli.manager")

__all__ = ["AddResult", "PromptLifecycleMixin", "merge_labels"]


@dataclass(slots=True, frozen=True)
class AddResult:
    """Outcome of an add request; ``added`` is False for duplicates."""

    prompt: Prompt
    added: bool


def merge_labels(
    existing: Iterable[str],
    add: Iterable[str] | None = None,
    remove: Iterable[str] | None = None,
) -> tuple[str, ...]:
    """Return ``(existing | add) - remove`` keeping first-seen order."""
    removed = set(normalise_labels(remove))
    merged = normalise_labels([*existing, *(add or ())])
    return tuple(label for label in merged if label not in removed)


class PromptLifecycleMixin:
    """Prompt CRUD orchestration over a :class:`PromptStore`."""

    _store: PromptStore

    def load_prompts(self) -> list[Prompt]:
        """Return every stored prompt, translating backend failures."""
        try:
            return self._store.load_all()
        except RepositoryCorruptionError as exc:
            raise PromptSerializationError(str(exc)) from exc
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to load prompts: {exc}") from exc

    def get_prompt(self, prompt_hash: str) -> Prompt:
        """Return the prompt stored under ``prompt_hash``."""
        for prompt in self.load_prompts():
            if prompt.hash == prompt_hash:
                return prompt
        raise PromptNotFoundError(f"Prompt {prompt_hash} not found")

    def add(
        self,
        content: str,
        tags: Iterable[str] | None = None,
        categories: Iterable[str] | None = None,
    ) -> AddResult:
        """Store a new prompt unless one with the same content already exists."""
        if not content or not content.strip():
            raise InvalidPromptError("Prompt text cannot be empty")
        prompt = Prompt(
            content=content,
            tags=normalise_labels(tags),
            categories=normalise_labels(categories),
        )
        existing_hashes = {stored.hash for stored in self.load_prompts()}
        if prompt.hash in existing_hashes:
            logger.info("Prompt already exists", extra={"prompt_hash": prompt.hash})
            return AddResult(prompt=prompt, added=False)
        added = self._save(prompt)
        if added:
            logger.info("Prompt added", extra={"prompt_hash": prompt.hash})
        return AddResult(prompt=prompt, added=added)

    def edit(
        self,
        prompt_hash: str,
        *,
        content: str | None = None,
        add_tags: Iterable[str] | None = None,
        remove_tags: Iterable[str] | None = None,
        add_categories: Iterable[str] | None = None,
        remove_categories: Iterable[str] | None = None,
    ) -> Prompt:
        """Replace the prompt under ``prompt_hash`` with an edited copy.

        Content changes produce a new hash; the old record is deleted before the
        new one is saved.
        """
        prompts = self.load_prompts()
        current = next((prompt for prompt in prompts if prompt.hash == prompt_hash), None)
        if current is None:
            raise PromptNotFoundError(f"Prompt {prompt_hash} not found")
        if content is not None and not content.strip():
            raise InvalidPromptError("Prompt text cannot be empty")

        updated = replace(
            current,
            content=current.content if content is None else content,
            tags=merge_labels(current.tags, add_tags, remove_tags),
            categories=merge_labels(current.categories, add_categories, remove_categories),
        )
        if updated.hash != current.hash and any(p.hash == updated.hash for p in prompts):
            raise InvalidPromptError(
                f"Another prompt already has this content ({updated.short_hash})"
            )

        self.delete(current.hash)
        self._save(updated)
        logger.info(
            "Prompt updated",
            extra={"prompt_hash": current.hash, "new_hash": updated.hash},
        )
        return updated

    def delete(self, prompt_hash: str) -> None:
        """Delete the prompt stored under ``prompt_hash`` (no-op when absent)."""
        try:
            self._store.delete(prompt_hash)
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to delete prompt {prompt_hash}: {exc}") from exc

    def _save(self, prompt: Prompt) -> bool:
        try:
            return self._store.save(prompt)
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to persist prompt {prompt.hash}: {exc}") from exc
