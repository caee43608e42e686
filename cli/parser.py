"""Argument parser for the prompts-cli command line.

Updates:
  v0.2.0 - 2026-10-15 - Add import/export subcommands and JSON output mode.
  v0.1.0 - 2026-10-08 - Define list/show/generate/add/edit/delete subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from config import APP_VERSION

from .utils import split_csv

if TYPE_CHECKING:
    from collections.abc import Sequence


def _add_label_option(
    parser: argparse.ArgumentParser,
    flag: str,
    *,
    dest: str,
    help_text: str,
) -> None:
    parser.add_argument(
        flag,
        dest=dest,
        type=split_csv,
        action="extend",
        default=None,
        metavar="VALUE[,VALUE...]",
        help=f"{help_text} (comma-separated, repeatable).",
    )


def _add_filter_options(parser: argparse.ArgumentParser, *, categories: bool = True) -> None:
    parser.add_argument(
        "query",
        nargs="?",
        default="",
        help="Fuzzy search query matched against prompt content.",
    )
    _add_label_option(parser, "--tags", dest="tags", help_text="Require all of these tags")
    if categories:
        _add_label_option(
            parser,
            "--categories",
            dest="categories",
            help_text="Require all of these categories",
        )


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(
        prog="prompts-cli",
        description="Store, search, and render personal prompt snippets.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (TOML or JSON) or a prompt storage directory.",
    )
    parser.add_argument(
        "--output",
        choices=("text", "json"),
        default="text",
        help="Output format for results and errors (default: text).",
    )
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List stored prompts.")
    _add_label_option(list_parser, "--tags", dest="tags", help_text="Require all of these tags")

    show_parser = subparsers.add_parser("show", help="Show prompts matching a query.")
    _add_filter_options(show_parser)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Render a matching prompt with template variables.",
    )
    _add_filter_options(generate_parser)
    generate_parser.add_argument(
        "--variables",
        nargs="+",
        action="extend",
        default=None,
        metavar="KEY=VALUE",
        help="Template variables substituted into {{name}} placeholders.",
    )

    add_parser = subparsers.add_parser("add", help="Add a new prompt.")
    add_parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="Prompt text (read from stdin when omitted).",
    )
    _add_label_option(add_parser, "--tags", dest="tags", help_text="Tags to attach")
    _add_label_option(
        add_parser, "--categories", dest="categories", help_text="Categories to attach"
    )

    edit_parser = subparsers.add_parser("edit", help="Edit the prompt matching a query.")
    edit_parser.add_argument(
        "query",
        nargs="?",
        default="",
        help="Fuzzy search query selecting the prompt to edit.",
    )
    _add_label_option(
        edit_parser,
        "--filter-tags",
        dest="filter_tags",
        help_text="Only consider prompts carrying all of these tags",
    )
    edit_parser.add_argument(
        "--text",
        default=None,
        help="Replacement prompt text.",
    )
    _add_label_option(edit_parser, "--add-tags", dest="add_tags", help_text="Tags to add")
    _add_label_option(edit_parser, "--remove-tags", dest="remove_tags", help_text="Tags to remove")
    _add_label_option(
        edit_parser,
        "--add-categories",
        dest="add_categories",
        help_text="Categories to add",
    )
    _add_label_option(
        edit_parser,
        "--remove-categories",
        dest="remove_categories",
        help_text="Categories to remove",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete the prompt matching a query.")
    _add_filter_options(delete_parser, categories=False)

    import_parser = subparsers.add_parser(
        "import",
        help="Import prompts from a directory of JSON files.",
    )
    import_parser.add_argument(
        "directory", type=Path, help="Directory containing *.json prompt files."
    )

    export_parser = subparsers.add_parser(
        "export",
        help="Export all prompts into a directory as <hash>.json files.",
    )
    export_parser.add_argument(
        "directory", type=Path, help="Destination directory (created if missing)."
    )

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for prompts-cli."""
    return build_parser().parse_args(argv)
