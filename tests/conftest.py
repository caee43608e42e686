"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-10-16 - Parametrise manager fixture over JSON and SQLite stores.
  v0.1.0 - 2026-10-08 - Isolate config discovery from the developer's home directory.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from core.prompt_manager import PromptManager
from core.repository import JsonPromptStore, PromptStore, SQLitePromptStore

_ENV_VARS = (
    "PROMPTS_CLI_CONFIG",
    "PROMPTS_CLI_STORAGE_TYPE",
    "PROMPTS_CLI_STORAGE_PATH",
    "PROMPTS_CLI_STORAGE__TYPE",
    "PROMPTS_CLI_STORAGE__PATH",
)


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point platform config discovery at a temporary directory."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("APPDATA", str(config_home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path / "home"))


def make_store(kind: str, tmp_path: Path) -> PromptStore:
    """Return a fresh store of ``kind`` rooted under ``tmp_path``."""
    if kind == "json":
        return JsonPromptStore(tmp_path / "prompts")
    return SQLitePromptStore(tmp_path / "prompts.db")


@pytest.fixture(params=["json", "sqlite"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> Iterator[PromptStore]:
    """Yield each backend in turn so contract tests cover both."""
    backend = make_store(str(request.param), tmp_path)
    yield backend
    backend.close()


@pytest.fixture
def manager(store: PromptStore) -> Iterator[PromptManager]:
    """Yield a PromptManager bound to the parametrised store."""
    with PromptManager(store) as prompt_manager:
        yield prompt_manager
