"""Runtime boot helpers for prompts-cli.

Updates:
  v0.1.1 - 2026-10-12 - Map --verbose counts onto log levels; default to WARNING.
  v0.1.0 - 2026-10-08 - Extract logging configuration helpers.
"""

from __future__ import annotations

import logging
import logging.config
from configparser import Error as ConfigParserError
from pathlib import Path

DEFAULT_LOGGING_CONFIG = Path("config/logging.conf")

_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for_verbosity(verbosity: int) -> int:
    """Return the log level matching the number of ``-v`` flags."""
    index = max(0, min(verbosity, len(_VERBOSITY_LEVELS) - 1))
    return _VERBOSITY_LEVELS[index]


def setup_logging(logging_conf_path: Path | None, verbosity: int = 0) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or DEFAULT_LOGGING_CONFIG
    failure: Exception | None = None
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except (ConfigParserError, KeyError, ValueError, OSError, RuntimeError) as exc:
            failure = exc
    logging.basicConfig(
        level=level_for_verbosity(verbosity),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if failure is not None:
        logging.getLogger("prompts_cli.runtime").warning(
            "Ignoring unusable logging config %s: %s", path, failure
        )
