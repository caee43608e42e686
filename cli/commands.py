"""CLI command handlers for prompts-cli.

Updates:
  v0.2.0 - 2026-10-15 - Add import/export handlers and JSON output for every command.
  v0.1.0 - 2026-10-08 - Handlers for list/show/generate/add/edit/delete.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core import export_prompt_directory, import_prompt_directory, parse_variable_assignments

from .utils import dump_json, print_and_log, prompts_to_json, read_prompt_text

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core.prompt_manager import PromptManager
    from models.prompt_model import Prompt
else:  # pragma: no cover - runtime placeholders for type-only imports
    PromptManager = object

CommandHandler = Callable[[PromptManager, argparse.Namespace, logging.Logger], int]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler


def _wants_json(args: argparse.Namespace) -> bool:
    return getattr(args, "output", "text") == "json"


def _single_match(
    matches: list[Prompt],
    logger: logging.Logger,
) -> Prompt | None:
    """Return the only match, or print every match as JSON and return None."""
    if len(matches) == 1:
        return matches[0]
    logger.info("Query matched %d prompts; printing candidates", len(matches))
    print(prompts_to_json(matches))
    return None


def run_list(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    prompts = manager.list_prompts(tags=args.tags)
    logger.debug("Listing %d prompts", len(prompts))
    if _wants_json(args):
        print(prompts_to_json(prompts))
        return 0
    for prompt in prompts:
        print(f"{prompt.short_hash} - {prompt.title}")
    return 0


def run_show(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    matches = manager.search(args.query, tags=args.tags, categories=args.categories)
    if _wants_json(args):
        print(prompts_to_json(matches))
        return 0
    prompt = _single_match(matches, logger)
    if prompt is not None:
        print(prompt.content)
    return 0


def run_generate(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    variables = parse_variable_assignments(args.variables)
    matches = manager.search(args.query, tags=args.tags, categories=args.categories)
    prompt = _single_match(matches, logger)
    if prompt is None:
        return 0
    rendered = manager.generate(prompt, variables)
    if _wants_json(args):
        print(dump_json({"hash": prompt.hash, "text": rendered}))
    else:
        print(rendered)
    return 0


def run_add(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    text = args.text
    if text is None:
        text = read_prompt_text(None if _wants_json(args) else "Enter the prompt text:")
    result = manager.add(text, tags=args.tags, categories=args.categories)
    if _wants_json(args):
        print(dump_json({"hash": result.prompt.hash, "added": result.added}))
        return 0
    if result.added:
        message = f"Prompt added successfully with hash: {result.prompt.short_hash}"
    else:
        message = "Prompt already exists."
    print_and_log(logger, logging.INFO, message)
    return 0


def run_edit(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    matches = manager.search(args.query, tags=args.filter_tags)
    prompt = _single_match(matches, logger)
    if prompt is None:
        return 0
    updated = manager.edit(
        prompt.hash,
        content=args.text,
        add_tags=args.add_tags,
        remove_tags=args.remove_tags,
        add_categories=args.add_categories,
        remove_categories=args.remove_categories,
    )
    if _wants_json(args):
        print(dump_json({"old_hash": prompt.hash, "hash": updated.hash}))
        return 0
    print_and_log(logger, logging.INFO, f"Prompt {prompt.short_hash} updated.")
    return 0


def run_delete(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    matches = manager.search(args.query, tags=args.tags)
    prompt = _single_match(matches, logger)
    if prompt is None:
        return 0
    manager.delete(prompt.hash)
    if _wants_json(args):
        print(dump_json({"deleted": prompt.hash}))
        return 0
    print_and_log(logger, logging.INFO, f"Prompt {prompt.short_hash} deleted successfully.")
    return 0


def run_import(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    summary = import_prompt_directory(manager, args.directory.expanduser())
    if _wants_json(args):
        print(
            dump_json(
                {
                    "imported": summary.imported,
                    "skipped": summary.skipped,
                    "invalid": summary.invalid,
                }
            )
        )
        return 0
    print_and_log(logger, logging.INFO, summary.describe())
    return 0


def run_export(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    count = export_prompt_directory(manager, args.directory.expanduser())
    if _wants_json(args):
        print(dump_json({"exported": count}))
        return 0
    print_and_log(logger, logging.INFO, f"Exported {count} prompts")
    return 0


COMMAND_SPECS: dict[str, CommandSpec] = {
    "list": CommandSpec(run_list),
    "show": CommandSpec(run_show),
    "generate": CommandSpec(run_generate),
    "add": CommandSpec(run_add),
    "edit": CommandSpec(run_edit),
    "delete": CommandSpec(run_delete),
    "import": CommandSpec(run_import),
    "export": CommandSpec(run_export),
}


__all__ = ["CommandSpec", "COMMAND_SPECS"]
