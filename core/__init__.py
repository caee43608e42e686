"""Core service layer for prompts-cli.

Updates:
  v0.3.0 - 2026-10-15 - Export directory import/export helpers.
  v0.2.0 - 2026-10-11 - Export backend factory and SQLite store.
  v0.1.0 - 2026-10-06 - Surface PromptManager and the JSON prompt store.
"""

from .catalog import ImportSummary, export_prompt_directory, import_prompt_directory
from .exceptions import (
    ConfigurationError,
    InvalidPromptError,
    PromptIOError,
    PromptManagerError,
    PromptNotFoundError,
    PromptRenderError,
    PromptSerializationError,
    PromptStorageError,
)
from .factory import build_prompt_manager, build_prompt_store, default_storage_path
from .prompt_manager import AddResult, PromptManager
from .repository import (
    JsonPromptStore,
    PromptStore,
    RepositoryCorruptionError,
    RepositoryError,
    SQLitePromptStore,
)
from .templating import TemplateRenderer, parse_variable_assignments

__all__ = [
    "AddResult",
    "ConfigurationError",
    "ImportSummary",
    "InvalidPromptError",
    "JsonPromptStore",
    "PromptIOError",
    "PromptManager",
    "PromptManagerError",
    "PromptNotFoundError",
    "PromptRenderError",
    "PromptSerializationError",
    "PromptStorageError",
    "PromptStore",
    "RepositoryCorruptionError",
    "RepositoryError",
    "SQLitePromptStore",
    "TemplateRenderer",
    "build_prompt_manager",
    "build_prompt_store",
    "default_storage_path",
    "export_prompt_directory",
    "import_prompt_directory",
    "parse_variable_assignments",
]
