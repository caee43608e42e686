"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`PromptManagerError`, allowing
callers to catch a single base class for any manager-related failure while
still distinguishing individual error categories when needed. Each class carries
a ``kind`` slug that the CLI uses when emitting JSON error envelopes.

Updates:
  v0.3.0 - 2026-10-14 - Add template rendering and invalid input errors.
  v0.2.0 - 2026-10-09 - Attach ``kind`` slugs and envelope payload helper.
  v0.1.0 - 2026-10-05 - Created module with storage/IO/serialization errors.
"""

from __future__ import annotations

from collections.abc import Iterable


class PromptManagerError(Exception):
    """Base exception for prompts-cli failures."""

    kind = "error"

    def to_payload(self) -> dict[str, dict[str, str]]:
        """Return the JSON error envelope for this failure."""
        return {"error": {"kind": self.kind, "message": str(self)}}


class PromptIOError(PromptManagerError):
    """Raised when reading or writing files outside the store fails."""

    kind = "io"


class PromptSerializationError(PromptManagerError):
    """Raised when a stored or imported record cannot be (de)serialized."""

    kind = "json"


class ConfigurationError(PromptManagerError):
    """Raised when runtime configuration cannot be turned into services."""

    kind = "config"


class PromptStorageError(PromptManagerError):
    """Raised when interactions with persistent backends fail."""

    kind = "storage"


class PromptNotFoundError(PromptManagerError):
    """Raised when a prompt cannot be located in the backing store."""

    kind = "not_found"


class InvalidPromptError(PromptManagerError):
    """Raised when user supplied prompt data is unusable."""

    kind = "invalid_input"


class PromptRenderError(PromptManagerError):
    """Raised when a prompt template cannot be rendered."""

    kind = "template"

    def __init__(self, message: str, missing_variables: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.missing_variables = sorted(set(missing_variables))


__all__ = [
    "ConfigurationError",
    "InvalidPromptError",
    "PromptIOError",
    "PromptManagerError",
    "PromptNotFoundError",
    "PromptRenderError",
    "PromptSerializationError",
    "PromptStorageError",
]
