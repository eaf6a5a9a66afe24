"""Prompt validation shared by the submission controller and the gateway."""

from ghost_stories.config import settings

EMPTY_PROMPT_MESSAGE = "Please enter a prompt to generate your ghost story"


def too_short_message() -> str:
    return f"Prompt must be at least {settings.prompt_min_length} characters"


def too_long_message() -> str:
    return f"Prompt must be less than {settings.prompt_max_length} characters"


def check_prompt_length(prompt: str) -> str | None:
    """Check the raw prompt length against the configured bounds.

    Args:
        prompt: Prompt as submitted, not stripped.

    Returns:
        Error message if the length is outside the bounds, None otherwise.
    """
    if len(prompt) < settings.prompt_min_length:
        return too_short_message()
    if len(prompt) > settings.prompt_max_length:
        return too_long_message()
    return None


def validate_prompt(prompt: str) -> str | None:
    """Validate a prompt before submission.

    A whitespace-only prompt gets its own message; otherwise the length
    bounds apply exactly as the gateway applies them.
    """
    if not prompt.strip():
        return EMPTY_PROMPT_MESSAGE
    return check_prompt_length(prompt)
