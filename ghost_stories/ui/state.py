"""State management for the story submission flow.

The controller is independent of any UI framework: the htmx pages keep its
state in the signed session cookie, the Streamlit app in st.session_state.
"""

import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from pydantic import BaseModel, Field

from ghost_stories.api.models import ErrorCode, ErrorResponse, GenerationResult, StoryResponse
from ghost_stories.stories.validation import validate_prompt
from ghost_stories.ui.utils import describe_client_error

logger = logging.getLogger(__name__)


class ControllerPhase(str, Enum):
    """Phases of the submission state machine."""

    IDLE = "idle"
    GENERATING = "generating"
    SUCCESS = "success"
    FAILED = "failed"


class InvalidTransitionError(RuntimeError):
    """Raised when an action is not allowed in the current phase."""


class GenerationInProgressError(InvalidTransitionError):
    """Raised when a submission arrives while one is already in flight."""


class InvalidPromptError(ValueError):
    """Raised when a prompt fails client-side validation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SessionState(BaseModel):
    """Ephemeral per-page state, rebuilt on every full page load."""

    current_story: str | None = Field(default=None, description="Last generated story")
    is_generating: bool = Field(default=False, description="Generation in flight")
    error: str | None = Field(default=None, description="Last error message")
    error_code: ErrorCode | None = Field(default=None, description="Last error code")
    retryable: bool = Field(default=False, description="Whether retry is offered")
    last_prompt: str = Field(default="", description="Prompt to resubmit on retry")
    show_slow_warning: bool = Field(default=False, description="Slow generation notice")


class SubmissionController:
    """Drives SessionState through idle, generating, success and failed."""

    def __init__(self, state: SessionState | None = None):
        self.state = state or SessionState()

    @property
    def phase(self) -> ControllerPhase:
        if self.state.is_generating:
            return ControllerPhase.GENERATING
        if self.state.current_story is not None:
            return ControllerPhase.SUCCESS
        if self.state.error is not None:
            return ControllerPhase.FAILED
        return ControllerPhase.IDLE

    def submit(self, prompt: str) -> str:
        """Start generating for a new prompt.

        Args:
            prompt: Prompt text as typed.

        Returns:
            The prompt to send to the generator.

        Raises:
            InvalidPromptError: If the prompt fails validation.
            GenerationInProgressError: If a generation is already running.
        """
        if self.state.is_generating:
            raise GenerationInProgressError("A story is already being generated")

        message = validate_prompt(prompt)
        if message:
            raise InvalidPromptError(message)

        self._begin(prompt)
        return prompt

    def retry(self) -> str:
        """Resubmit the last prompt after a retryable failure.

        Returns:
            The recorded prompt, unchanged.
        """
        if self.phase is not ControllerPhase.FAILED or not self.state.retryable:
            raise InvalidTransitionError("Nothing to retry")

        self._begin(self.state.last_prompt)
        return self.state.last_prompt

    def resolve(self, result: GenerationResult) -> None:
        """Apply the generator's result to the state."""
        self._require_generating()
        self.state.is_generating = False
        self.state.show_slow_warning = False

        if isinstance(result, StoryResponse):
            self.state.current_story = result.story
            self.state.error = None
            self.state.error_code = None
            self.state.retryable = False
        else:
            self._set_error(result)

    def fail(self, exc: BaseException) -> None:
        """Record an exception raised by the generation call."""
        self._require_generating()
        logger.error(f"Error generating story: {exc!r}")
        self.state.is_generating = False
        self.state.show_slow_warning = False
        self._set_error(
            ErrorResponse(
                error=describe_client_error(exc),
                code=ErrorCode.UNKNOWN,
                retryable=True,
            )
        )

    def start_over(self) -> None:
        """Clear story and error without resubmitting. Safe to call repeatedly."""
        if self.state.is_generating:
            raise GenerationInProgressError("Cannot start over while generating")

        self.state.current_story = None
        self.state.error = None
        self.state.error_code = None
        self.state.retryable = False

    def mark_slow(self) -> bool:
        """Show the slow warning if still generating.

        Returns:
            True if the warning is now shown.
        """
        if not self.state.is_generating:
            return False
        self.state.show_slow_warning = True
        return True

    def run(self, prompt: str, generate: Callable[[str], GenerationResult]) -> ControllerPhase:
        """Submit a prompt and apply the outcome of a synchronous generator."""
        return self._drive(self.submit(prompt), generate)

    def run_retry(self, generate: Callable[[str], GenerationResult]) -> ControllerPhase:
        """Retry the last prompt with a synchronous generator."""
        return self._drive(self.retry(), generate)

    async def arun(
        self,
        prompt: str,
        agenerate: Callable[[str], Awaitable[GenerationResult]],
    ) -> ControllerPhase:
        """Async version of run."""
        return await self._adrive(self.submit(prompt), agenerate)

    async def arun_retry(
        self,
        agenerate: Callable[[str], Awaitable[GenerationResult]],
    ) -> ControllerPhase:
        """Async version of run_retry."""
        return await self._adrive(self.retry(), agenerate)

    def _drive(self, prompt: str, generate: Callable[[str], GenerationResult]) -> ControllerPhase:
        try:
            result = generate(prompt)
        except Exception as e:
            self.fail(e)
        else:
            self.resolve(result)
        return self.phase

    async def _adrive(
        self,
        prompt: str,
        agenerate: Callable[[str], Awaitable[GenerationResult]],
    ) -> ControllerPhase:
        try:
            result = await agenerate(prompt)
        except Exception as e:
            self.fail(e)
        else:
            self.resolve(result)
        return self.phase

    def _begin(self, prompt: str) -> None:
        self.state.current_story = None
        self.state.error = None
        self.state.error_code = None
        self.state.retryable = False
        self.state.show_slow_warning = False
        self.state.last_prompt = prompt
        self.state.is_generating = True

    def _require_generating(self) -> None:
        if not self.state.is_generating:
            raise InvalidTransitionError("No generation in flight")

    def _set_error(self, result: ErrorResponse) -> None:
        self.state.current_story = None
        self.state.error = result.error
        self.state.error_code = result.code
        self.state.retryable = result.retryable
