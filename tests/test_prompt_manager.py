"""Tests for PromptManager lifecycle, listing, and generation.

Updates:
  v0.2.0 - 2026-10-14 - Cover template generation and render errors.
  v0.1.0 - 2026-10-08 - Cover add/edit/delete semantics against both backends.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from core.exceptions import (
    InvalidPromptError,
    PromptNotFoundError,
    PromptRenderError,
    PromptSerializationError,
    PromptStorageError,
)
from core.prompt_manager import PromptManager, merge_labels
from core.repository import JsonPromptStore, RepositoryError
from models.prompt_model import Prompt, compute_prompt_hash


def test_add_stores_prompt_under_content_hash(manager: PromptManager) -> None:
    result = manager.add("Write a haiku about {{season}}", tags=["poetry"])
    assert result.added is True
    assert result.prompt.hash == compute_prompt_hash("Write a haiku about {{season}}")
    listed = manager.list_prompts()
    assert [prompt.hash for prompt in listed] == [result.prompt.hash]
    assert listed[0].tags == ("poetry",)


def test_add_duplicate_reports_existing(manager: PromptManager) -> None:
    manager.add("same text")
    second = manager.add("same text", tags=["ignored"])
    assert second.added is False
    prompts = manager.list_prompts()
    assert len(prompts) == 1
    assert prompts[0].tags == ()


@pytest.mark.parametrize("content", ["", "   ", "\n\t"])
def test_add_rejects_blank_content(manager: PromptManager, content: str) -> None:
    with pytest.raises(InvalidPromptError):
        manager.add(content)


def test_list_filters_by_all_tags_and_sorts(manager: PromptManager) -> None:
    manager.add("beta", tags=["a", "b"])
    manager.add("alpha", tags=["a"])
    manager.add("gamma", tags=["b"])
    assert [p.content for p in manager.list_prompts()] == ["alpha", "beta", "gamma"]
    assert [p.content for p in manager.list_prompts(tags=["a"])] == ["alpha", "beta"]
    assert [p.content for p in manager.list_prompts(tags=["a", "b"])] == ["beta"]
    assert manager.list_prompts(tags=["missing"]) == []


def test_edit_content_replaces_record(manager: PromptManager) -> None:
    original = manager.add("old body", tags=["keep"]).prompt
    updated = manager.edit(original.hash, content="new body")
    assert updated.hash == compute_prompt_hash("new body")
    assert updated.tags == ("keep",)
    hashes = {prompt.hash for prompt in manager.load_prompts()}
    assert hashes == {updated.hash}


def test_edit_merges_label_deltas(manager: PromptManager) -> None:
    """Existing labels plus additions minus removals, first-seen order kept."""
    prompt = manager.add("labelled", tags=["tag1", "tag2"], categories=["catA"]).prompt
    updated = manager.edit(
        prompt.hash,
        add_tags=["tag3"],
        remove_tags=["tag1"],
        add_categories=["catB"],
    )
    assert updated.hash == prompt.hash
    assert updated.tags == ("tag2", "tag3")
    assert updated.categories == ("catA", "catB")
    assert manager.get_prompt(prompt.hash).tags == ("tag2", "tag3")


def test_edit_single_tag_swap(manager: PromptManager) -> None:
    prompt = manager.add("swap", tags=["tag1"]).prompt
    updated = manager.edit(prompt.hash, add_tags=["tag2"], remove_tags=["tag1"])
    assert updated.tags == ("tag2",)


def test_edit_unknown_hash_raises(manager: PromptManager) -> None:
    with pytest.raises(PromptNotFoundError):
        manager.edit("f" * 64, content="anything")


def test_edit_rejects_collision_without_deleting(manager: PromptManager) -> None:
    first = manager.add("first").prompt
    manager.add("second")
    with pytest.raises(InvalidPromptError):
        manager.edit(first.hash, content="second")
    assert {p.content for p in manager.load_prompts()} == {"first", "second"}


def test_edit_rejects_blank_content(manager: PromptManager) -> None:
    prompt = manager.add("body").prompt
    with pytest.raises(InvalidPromptError):
        manager.edit(prompt.hash, content="  ")


def test_delete_targets_single_record(manager: PromptManager) -> None:
    keep = manager.add("keep").prompt
    drop = manager.add("drop").prompt
    manager.delete(drop.hash)
    assert manager.load_prompts() == [keep]
    manager.delete(drop.hash)
    assert manager.load_prompts() == [keep]


def test_get_prompt_missing_raises(manager: PromptManager) -> None:
    with pytest.raises(PromptNotFoundError):
        manager.get_prompt("0" * 64)


def test_generate_substitutes_variables(manager: PromptManager) -> None:
    prompt = manager.add("Hello {{name}}, welcome to {{place}}.\n").prompt
    rendered = manager.generate(prompt, {"name": "Ada", "place": "the lab"})
    assert rendered == "Hello Ada, welcome to the lab.\n"


def test_generate_without_placeholders_returns_content(manager: PromptManager) -> None:
    prompt = manager.add("Static text").prompt
    assert manager.generate(prompt) == "Static text"


def test_generate_reports_missing_variables(manager: PromptManager) -> None:
    prompt = manager.add("{{greeting}} {{name}}").prompt
    with pytest.raises(PromptRenderError) as excinfo:
        manager.generate(prompt, {"greeting": "Hi"})
    assert excinfo.value.missing_variables == ["name"]
    assert "name" in str(excinfo.value)


def test_generate_reports_syntax_errors(manager: PromptManager) -> None:
    prompt = manager.add("Broken {{ name").prompt
    with pytest.raises(PromptRenderError):
        manager.generate(prompt, {"name": "x"})
    with pytest.raises(PromptRenderError):
        manager.template_variables(prompt)


def test_template_variables_lists_placeholders(manager: PromptManager) -> None:
    prompt = manager.add("{{b}} and {{a}} and {{b}}").prompt
    assert manager.template_variables(prompt) == ["a", "b"]


def test_merge_labels_helper() -> None:
    assert merge_labels(["a", "b"], ["c", "a"], ["b"]) == ("a", "c")
    assert merge_labels([], None, None) == ()


def test_corrupt_store_surfaces_serialization_error(tmp_path: Path) -> None:
    (tmp_path / "bad.json").write_text("[1, 2", encoding="utf-8")
    manager = PromptManager(JsonPromptStore(tmp_path))
    with pytest.raises(PromptSerializationError):
        manager.list_prompts()


class _FailingStore:
    def save(self, prompt: Prompt) -> bool:
        raise RepositoryError("disk full")

    def load_all(self) -> list[Prompt]:
        return []

    def delete(self, prompt_hash: str) -> None:
        raise RepositoryError("locked")

    def close(self) -> None:
        return


def test_backend_failures_surface_as_storage_errors() -> None:
    manager = PromptManager(_FailingStore())
    with pytest.raises(PromptStorageError, match="disk full"):
        manager.add("text")
    with pytest.raises(PromptStorageError, match="locked"):
        manager.delete("abc")


def test_close_is_idempotent(tmp_path: Path) -> None:
    manager = PromptManager(JsonPromptStore(tmp_path))
    manager.close()
    manager.close()
