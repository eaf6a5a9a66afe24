"""UI module: submission controller, API client and display helpers."""

from ghost_stories.ui.api_client import APIClient
from ghost_stories.ui.state import (
    ControllerPhase,
    GenerationInProgressError,
    InvalidPromptError,
    InvalidTransitionError,
    SessionState,
    SubmissionController,
)
from ghost_stories.ui.utils import (
    describe_client_error,
    split_paragraphs,
    truncate_text,
)

__all__ = [
    "APIClient",
    "ControllerPhase",
    "GenerationInProgressError",
    "InvalidPromptError",
    "InvalidTransitionError",
    "SessionState",
    "SubmissionController",
    "describe_client_error",
    "split_paragraphs",
    "truncate_text",
]
