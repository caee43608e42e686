"""Application entry point for prompts-cli.

Updates:
  v0.3.0 - 2026-10-15 - Emit JSON error envelopes when --output json is selected.
  v0.2.0 - 2026-10-12 - Resolve --config files and directories before building storage.
  v0.1.0 - 2026-10-08 - Wire settings, storage, and CLI command dispatch.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING

from cli.commands import COMMAND_SPECS
from cli.parser import build_parser, parse_args
from cli.runtime import setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import ConfigurationError, PromptManagerError, build_prompt_manager

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

    from core.prompt_manager import PromptManager

EXIT_OK = 0
EXIT_ERROR = 1


def _report_error(payload: dict[str, dict[str, str]], *, json_output: bool) -> int:
    """Print a failure as a JSON envelope on stdout or a plain line on stderr."""
    if json_output:
        print(json.dumps(payload, ensure_ascii=False))
    else:
        print(f"Error: {payload['error']['message']}", file=sys.stderr)
    return EXIT_ERROR


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, storage, and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config, args.verbose)

    logger = logging.getLogger("prompts_cli.main")
    json_output = args.output == "json"
    manager: PromptManager | None = None
    try:
        settings = load_settings(args.config)
        if args.print_settings:
            if json_output:
                print(settings.model_dump_json(indent=2))
            else:
                print_settings_summary(settings)
            return EXIT_OK

        spec = COMMAND_SPECS.get(args.command) if args.command else None
        if spec is None:
            build_parser().print_help(sys.stderr)
            return EXIT_ERROR

        manager = build_prompt_manager(settings)
        return spec.handler(manager, args, logger)
    except SettingsError as exc:
        logger.debug("Failed to load settings", exc_info=True)
        return _report_error(ConfigurationError(str(exc)).to_payload(), json_output=json_output)
    except PromptManagerError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        return _report_error(exc.to_payload(), json_output=json_output)
    except Exception as exc:  # noqa: BLE001 - surfaced to CLI
        logger.exception("Unexpected failure while running %s", args.command)
        payload = {"error": {"kind": "unexpected", "message": str(exc)}}
        return _report_error(payload, json_output=json_output)
    finally:
        if manager is not None:
            manager.close()


if __name__ == "__main__":
    raise SystemExit(main())
