"""Data models for prompts-cli.

Updates: v0.1.0 - 2026-10-05 - Export Prompt dataclass and hashing helpers.
"""

from .prompt_model import Prompt, compute_prompt_hash, normalise_labels, short_hash

__all__ = [
    "Prompt",
    "compute_prompt_hash",
    "normalise_labels",
    "short_hash",
]
