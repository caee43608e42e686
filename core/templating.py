"""Jinja2 templating utilities for prompt generation.

Updates: v0.2.0 - 2026-10-14 - Parse ``key=value`` CLI assignments into render variables.
Updates: v0.1.1 - 2026-10-09 - Point at the unbalanced delimiter in syntax error messages.
Updates: v0.1.0 - 2026-10-07 - Add strict Jinja2 renderer for ``{{name}}`` placeholders.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, UndefinedError, meta

from .exceptions import InvalidPromptError

_DELIMITER_PAIRS: tuple[tuple[str, str], ...] = (("{{", "}}"), ("{%", "%}"))
_JINJA_GLOBALS = frozenset({"loop", "super", "caller", "cycler", "joiner", "namespace", "range"})


@dataclass(slots=True)
class TemplateRenderResult:
    """Rendered text, or the errors that prevented rendering."""

    rendered_text: str
    errors: list[str] = field(default_factory=list)
    missing_variables: set[str] = field(default_factory=set)

    @property
    def ok(self) -> bool:
        return not self.errors


def _unbalanced_delimiter(line: str) -> str | None:
    for opener, closer in _DELIMITER_PAIRS:
        opened, closed = line.count(opener), line.count(closer)
        if opened > closed:
            return f"missing closing '{closer}' after '{opener}'."
        if closed > opened:
            return f"missing opening '{opener}' before '{closer}'."
    return None


def format_template_syntax_error(template_text: str, exc: TemplateSyntaxError) -> str:
    """Return ``exc`` as a one-line message quoting the offending line."""
    message = f"Template syntax error on line {exc.lineno}: {exc.message}"
    lines = template_text.splitlines()
    line = lines[exc.lineno - 1] if 0 < exc.lineno <= len(lines) else ""
    if line.strip():
        message += f" | Line {exc.lineno}: {line.strip()}"
    hint = _unbalanced_delimiter(line)
    if hint:
        message += f" Hint: {hint}"
    return message


class TemplateRenderer:
    """Render ``{{name}}`` placeholders; undefined names are errors, not blanks."""

    def __init__(self) -> None:
        self._env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )

    def extract_variables(self, template_text: str) -> list[str]:
        """Return sorted placeholder names referenced within ``template_text``.

        Raises ``TemplateSyntaxError`` for unparsable templates.
        """
        if not template_text.strip():
            return []
        names = meta.find_undeclared_variables(self._env.parse(template_text))
        return sorted(names - _JINJA_GLOBALS)

    def render(self, template_text: str, variables: Mapping[str, Any]) -> TemplateRenderResult:
        """Render ``template_text`` with ``variables``, collecting errors in the result."""
        try:
            template = self._env.from_string(template_text)
            missing = set(self.extract_variables(template_text)) - set(variables)
        except TemplateSyntaxError as exc:
            return TemplateRenderResult("", [format_template_syntax_error(template_text, exc)])
        if missing:
            names = ", ".join(sorted(missing))
            return TemplateRenderResult("", [f"Missing template variables: {names}"], missing)
        try:
            return TemplateRenderResult(template.render(**variables))
        except UndefinedError as exc:
            # attribute/item lookups on supplied values are only caught at render time
            return TemplateRenderResult("", [exc.message or str(exc)])


def parse_variable_assignments(pairs: Iterable[str] | None) -> dict[str, str]:
    """Convert ``key=value`` strings into a variables mapping.

    Later assignments win; values may themselves contain ``=``.
    """
    variables: dict[str, str] = {}
    for raw in pairs or ():
        key, separator, value = raw.partition("=")
        key = key.strip()
        if not separator or not key:
            raise InvalidPromptError(f"Invalid variable assignment '{raw}'; expected key=value")
        variables[key] = value
    return variables


__all__ = [
    "TemplateRenderer",
    "TemplateRenderResult",
    "format_template_syntax_error",
    "parse_variable_assignments",
]
