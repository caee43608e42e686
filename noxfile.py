"""noxfile.py - Nox sessions for prompts-cli.

Updates:
  v0.2.0 - 2026-10-16 - Drive every session from one tool runner and a shared gate table.
  v0.1.0 - 2026-10-06 - Initial scaffold of format/lint/typecheck/test sessions.

Sessions reuse the tools installed in `.venv` (`pip install -e .[dev]`):
- format: ruff format
- lint: ruff check
- typecheck: pyright
- test: pytest with coverage across xdist workers
- all: lint, format check, typecheck, then tests
"""

from __future__ import annotations

import os
from pathlib import Path

import nox

SOURCES: tuple[str, ...] = ("main.py", "cli", "config", "core", "models", "tests")
COVERED_PACKAGES: tuple[str, ...] = ("core", "cli", "config", "models")
COVERAGE_FLOOR = 80

PYTEST_ARGS: tuple[str, ...] = (
    "-n",
    "auto",
    *(f"--cov={package}" for package in COVERED_PACKAGES),
    "--cov-report=term-missing",
    f"--cov-fail-under={COVERAGE_FLOOR}",
    "tests",
)

QUALITY_GATE: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ruff", ("check", *SOURCES)),
    ("ruff", ("format", "--check", *SOURCES)),
    ("pyright", SOURCES),
    ("pytest", PYTEST_ARGS),
)


def _tool_path(tool: str) -> Path:
    bin_dir = "Scripts" if os.name == "nt" else "bin"
    suffix = ".exe" if os.name == "nt" else ""
    return Path(".venv") / bin_dir / f"{tool}{suffix}"


def _run_tool(session: nox.Session, tool: str, *args: str) -> None:
    """Run *tool* from `.venv`, stopping the session with setup guidance when absent."""
    executable = _tool_path(tool)
    if not executable.exists():
        session.error(
            f"{tool} not found at {executable}; run "
            "`python -m venv .venv` then `pip install -e .[dev]` inside it."
        )
    session.run(str(executable), *args, external=True)


@nox.session(venv_backend="none")
def format(session: nox.Session) -> None:
    """Usage: `nox -s format`"""
    _run_tool(session, "ruff", "format", *SOURCES)


@nox.session(venv_backend="none")
def lint(session: nox.Session) -> None:
    """Usage: `nox -s lint`"""
    _run_tool(session, "ruff", "check", *SOURCES)


@nox.session(venv_backend="none")
def typecheck(session: nox.Session) -> None:
    """Usage: `nox -s typecheck`"""
    _run_tool(session, "pyright", *SOURCES)


@nox.session(venv_backend="none")
def test(session: nox.Session) -> None:
    """Usage: `nox -s test`"""
    _run_tool(session, "pytest", *PYTEST_ARGS)


@nox.session(venv_backend="none")
def all(session: nox.Session) -> None:
    """Run the whole quality gate in order.

    Usage: `nox -s all`
    """
    for tool, args in QUALITY_GATE:
        _run_tool(session, tool, *args)
