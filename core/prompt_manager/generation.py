"""Template-driven text generation for stored prompts.

Updates:
  v0.1.0 - 2026-10-14 - Render prompt content with strict ``{{name}}`` substitution.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from jinja2 import TemplateSyntaxError

from ..exceptions import PromptRenderError
from ..templating import format_template_syntax_error

if TYPE_CHECKING:
    from collections.abc import Mapping

    from models.prompt_model import Prompt

    from ..templating import TemplateRenderer

logger = logging.getLogger("prompts_cli.manager")

__all__ = ["PromptGenerationMixin"]


class PromptGenerationMixin:
    """Render prompt templates with caller supplied variables."""

    _renderer: TemplateRenderer

    def template_variables(self, prompt: Prompt) -> list[str]:
        """Return placeholder names referenced by ``prompt``."""
        try:
            return self._renderer.extract_variables(prompt.content)
        except TemplateSyntaxError as exc:
            message = format_template_syntax_error(prompt.content, exc)
            raise PromptRenderError(message) from exc

    def generate(self, prompt: Prompt, variables: Mapping[str, Any] | None = None) -> str:
        """Return ``prompt`` content with ``variables`` substituted."""
        result = self._renderer.render(prompt.content, variables or {})
        if result.errors:
            logger.debug(
                "Prompt rendering failed",
                extra={"prompt_hash": prompt.hash, "errors": result.errors},
            )
            raise PromptRenderError("; ".join(result.errors), result.missing_variables)
        return result.rendered_text
