"""Prompt manager facade and orchestration layer.

Updates:
  v0.3.0 - 2026-10-14 - Compose generation mixin for ``{{name}}`` template rendering.
  v0.2.0 - 2026-10-12 - Move search and listing APIs into dedicated mixin.
  v0.1.0 - 2026-10-08 - Introduce store-backed manager with add/edit/delete lifecycle.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import (
    InvalidPromptError,
    PromptManagerError,
    PromptNotFoundError,
    PromptRenderError,
    PromptSerializationError,
    PromptStorageError,
)
from ..repository import RepositoryError
from ..templating import TemplateRenderer
from .generation import PromptGenerationMixin
from .lifecycle import AddResult, PromptLifecycleMixin, merge_labels
from .search import PromptSearchMixin, fuzzy_score, search_prompts

if TYPE_CHECKING:
    from types import TracebackType

    from ..repository import PromptStore

logger = logging.getLogger("prompts_cli.manager")


class PromptManager(
    PromptLifecycleMixin,
    PromptGenerationMixin,
    PromptSearchMixin,
):
    """Manage prompt persistence, search, and template generation."""

    def __init__(
        self,
        store: PromptStore,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        """Bind the manager to ``store``; ``renderer`` defaults to a strict Jinja2 renderer."""
        self._store = store
        self._renderer = renderer or TemplateRenderer()
        self._closed = False

    @property
    def store(self) -> PromptStore:
        """Return the backing prompt store."""
        return self._store

    def close(self) -> None:
        """Release backend resources; repeated calls are ignored."""
        if self._closed:
            return
        self._closed = True
        try:
            self._store.close()
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to close prompt store: {exc}") from exc
        logger.debug("Prompt store closed")

    def __enter__(self) -> PromptManager:
        """Support use of PromptManager as a context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close resources when exiting a context manager block."""
        self.close()


__all__ = [
    "AddResult",
    "InvalidPromptError",
    "PromptManager",
    "PromptManagerError",
    "PromptNotFoundError",
    "PromptRenderError",
    "PromptSerializationError",
    "PromptStorageError",
    "fuzzy_score",
    "merge_labels",
    "search_prompts",
]
