"""API module for FastAPI REST endpoints."""

from ghost_stories.api.models import (
    ErrorCode,
    ErrorResponse,
    GenerateStoryRequest,
    GenerationResult,
    StoryResponse,
)

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "GenerateStoryRequest",
    "GenerationResult",
    "StoryResponse",
]
