"""API request and response models."""

from enum import Enum

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Error code enumeration for failed generations."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    API_ERROR = "API_ERROR"
    TIMEOUT = "TIMEOUT"
    UNKNOWN = "UNKNOWN"


class GenerateStoryRequest(BaseModel):
    """Request model for story generation.

    Length is checked by the generation gateway so that an out-of-range
    prompt yields a VALIDATION_ERROR result instead of a 422.
    """

    prompt: str = Field(description="Theme of the ghost story")


class StoryResponse(BaseModel):
    """Successful generation result."""

    story: str = Field(description="Generated story text")


class ErrorResponse(BaseModel):
    """Failed generation result."""

    error: str = Field(description="Human-readable error message")
    code: ErrorCode = Field(description="Error category")
    retryable: bool = Field(description="Whether the same prompt may be resubmitted")


GenerationResult = StoryResponse | ErrorResponse
