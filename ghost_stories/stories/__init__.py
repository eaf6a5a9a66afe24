"""Story generation gateway and its error classification."""

from ghost_stories.stories.errors import GenerationTimeoutError, classify_generation_error
from ghost_stories.stories.generator import (
    StoryGeneratorChain,
    generate_ghost_story,
    race_deadline,
)
from ghost_stories.stories.validation import check_prompt_length, validate_prompt

__all__ = [
    "GenerationTimeoutError",
    "StoryGeneratorChain",
    "check_prompt_length",
    "classify_generation_error",
    "generate_ghost_story",
    "race_deadline",
    "validate_prompt",
]
