"""Language-model content generation."""

from crisis_profiles.generation.base import LanguageModel
from crisis_profiles.generation.claude import ClaudeLanguageModel
from crisis_profiles.generation.generator import (
    ContentGenerator,
    GenerationResult,
    prepare_context,
)

__all__ = [
    "ClaudeLanguageModel",
    "ContentGenerator",
    "GenerationResult",
    "LanguageModel",
    "prepare_context",
]
