"""Fuzzy search and label filtering helpers for prompts-cli.

Scoring follows the usual subsequence matcher shape: every query character must
appear in order, then the tightest window is rescored with bonuses for runs,
word boundaries, and exact substring hits.

Updates:
  v0.2.1 - 2026-10-19 - Declare the borrowed load_prompts for type checkers only.
  v0.2.0 - 2026-10-13 - Tighten match windows before scoring to rank compact hits first.
  v0.1.0 - 2026-10-08 - Extract search mixin with AND-semantics tag/category filters.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from models.prompt_model import Prompt

logger = logging.getLogger("prompts_cli.search")

__all__ = ["PromptSearchMixin", "SearchHit", "fuzzy_score", "search_prompts"]

SCORE_MATCH = 16
BONUS_CONSECUTIVE = 8
BONUS_BOUNDARY = 8
BONUS_EXACT_PER_CHAR = 4
PENALTY_GAP = 1

_WHITESPACE = re.compile(r"\s+")


def _normalise_query(query: str | None) -> str:
    return _WHITESPACE.sub(" ", (query or "").strip()).lower()


def _match_window(needle: str, haystack: str) -> tuple[int, int] | None:
    """Return the tightest ``(start, end)`` window containing ``needle`` in order."""
    cursor = 0
    end = -1
    for char in needle:
        end = haystack.find(char, cursor)
        if end == -1:
            return None
        cursor = end + 1
    start = end
    remaining = len(needle) - 1
    while remaining >= 0:
        if haystack[start] == needle[remaining]:
            remaining -= 1
            if remaining < 0:
                break
        start -= 1
    return start, end


def _is_boundary(haystack: str, index: int) -> bool:
    if index == 0:
        return True
    return not haystack[index - 1].isalnum() and haystack[index].isalnum()


def fuzzy_score(query: str | None, text: str) -> int | None:
    """Return a relevance score for ``query`` in ``text`` or None when unmatched.

    An empty query matches everything with a score of zero.
    """
    needle = _normalise_query(query)
    if not needle:
        return 0
    haystack = text.lower()
    window = _match_window(needle, haystack)
    if window is None:
        return None
    start, _ = window

    score = 0
    previous = -2
    cursor = start
    for char in needle:
        position = haystack.index(char, cursor)
        score += SCORE_MATCH
        if position == previous + 1:
            score += BONUS_CONSECUTIVE
        elif previous >= 0:
            score -= PENALTY_GAP * (position - previous - 1)
        if _is_boundary(haystack, position):
            score += BONUS_BOUNDARY
        previous = position
        cursor = position + 1

    if needle in haystack:
        score += BONUS_EXACT_PER_CHAR * len(needle)
    return max(score, 1)


@dataclass(slots=True, frozen=True)
class SearchHit:
    """A matched prompt with its fuzzy relevance score."""

    prompt: Prompt
    score: int


def search_prompts(
    prompts: Iterable[Prompt],
    query: str | None = "",
    tags: Sequence[str] | None = None,
    categories: Sequence[str] | None = None,
) -> list[Prompt]:
    """Return prompts matching the fuzzy ``query`` and every requested label.

    Results are ordered by descending score with content as the tie breaker.
    """
    hits = rank_prompts(prompts, query, tags=tags, categories=categories)
    return [hit.prompt for hit in hits]


def rank_prompts(
    prompts: Iterable[Prompt],
    query: str | None = "",
    *,
    tags: Sequence[str] | None = None,
    categories: Sequence[str] | None = None,
) -> list[SearchHit]:
    """Return scored hits for ``query`` honouring tag and category filters."""
    required_tags = list(tags or ())
    required_categories = list(categories or ())
    hits: list[SearchHit] = []
    for prompt in prompts:
        if required_tags and not prompt.has_tags(required_tags):
            continue
        if required_categories and not prompt.has_categories(required_categories):
            continue
        score = fuzzy_score(query, prompt.content)
        if score is None:
            continue
        hits.append(SearchHit(prompt=prompt, score=score))
    hits.sort(key=lambda hit: (-hit.score, hit.prompt.content))
    return hits


class PromptSearchMixin:
    """Fuzzy search and filtered listing over the configured store."""

    if TYPE_CHECKING:

        def load_prompts(self) -> list[Prompt]: ...

    def search(
        self,
        query: str | None = "",
        tags: Sequence[str] | None = None,
        categories: Sequence[str] | None = None,
    ) -> list[Prompt]:
        """Return stored prompts matching ``query`` and every requested label."""
        results = search_prompts(self.load_prompts(), query, tags=tags, categories=categories)
        logger.debug(
            "Search completed",
            extra={"query": query or "", "matches": len(results)},
        )
        return results

    def list_prompts(self, tags: Sequence[str] | None = None) -> list[Prompt]:
        """Return stored prompts carrying all ``tags``, sorted by content."""
        prompts = [
            prompt
            for prompt in self.load_prompts()
            if not tags or prompt.has_tags(tags)
        ]
        prompts.sort(key=lambda prompt: (prompt.content, prompt.hash))
        return prompts
