"""Ghost story generation gateway."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate

from ghost_stories.api.models import ErrorCode, ErrorResponse, GenerationResult, StoryResponse
from ghost_stories.config import get_openai_api_key, settings
from ghost_stories.llm import get_llm
from ghost_stories.stories.errors import (
    GENERIC_FAILURE_MESSAGE,
    UNAVAILABLE_MESSAGE,
    GenerationTimeoutError,
    classify_generation_error,
)
from ghost_stories.stories.validation import check_prompt_length

logger = logging.getLogger(__name__)

T = TypeVar("T")


SYSTEM_PROMPT = """You are a master horror storyteller specializing in ghost stories.
Create a chilling, atmospheric ghost story based on the user's prompt.
The story should be 200-800 words, vivid, suspenseful, and genuinely scary.
Use descriptive language, build tension, and create an eerie atmosphere.
Include sensory details and psychological horror elements.
Do not include a title - just the story text."""

USER_PROMPT = """{prompt}"""


class StoryGeneratorChain:
    """Chain for generating a ghost story from a short prompt."""

    def __init__(self, llm: BaseChatModel):
        self.llm = llm
        self.prompt = ChatPromptTemplate.from_messages(
            [
                ("system", SYSTEM_PROMPT),
                ("human", USER_PROMPT),
            ]
        )

    async def agenerate(self, prompt: str) -> str:
        """Generate the raw story text for a prompt.

        Returns an empty string when the provider answers without a first
        choice, so the caller treats it like empty content.
        """
        messages = await self.prompt.aformat_messages(prompt=prompt)
        result = await self.llm.agenerate([messages])
        generations = result.generations[0] if result.generations else []
        if not generations:
            return ""
        return generations[0].text or ""


async def race_deadline(awaitable: Awaitable[T], timeout: float) -> T:
    """Await a result, giving up once the deadline passes.

    The pending provider call is cancelled on timeout; whether the provider
    stops work server-side is out of our hands, its result is simply dropped.

    Raises:
        GenerationTimeoutError: If the deadline resolves first.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        raise GenerationTimeoutError(timeout) from e


async def generate_ghost_story(
    prompt: str,
    chain: StoryGeneratorChain | None = None,
) -> GenerationResult:
    """Turn a prompt into a ghost story or a structured error.

    Args:
        prompt: User-supplied theme, 3-200 characters.
        chain: Optional pre-built chain. Built from the current credential when omitted.

    Returns:
        StoryResponse with the trimmed story, or ErrorResponse. Never raises
        for provider failures.
    """
    validation_error = check_prompt_length(prompt)
    if validation_error:
        return ErrorResponse(
            error=validation_error,
            code=ErrorCode.VALIDATION_ERROR,
            retryable=False,
        )

    # Secret Manager lookups are blocking
    api_key = await asyncio.to_thread(get_openai_api_key)
    if not api_key:
        logger.error("OPENAI_API_KEY not found in environment variables or Secret Manager")
        return ErrorResponse(
            error=UNAVAILABLE_MESSAGE,
            code=ErrorCode.API_ERROR,
            retryable=True,
        )

    if chain is None:
        chain = StoryGeneratorChain(llm=get_llm(api_key))

    logger.info(f"Generating story for prompt ({len(prompt)} chars)")
    try:
        story = await race_deadline(
            chain.agenerate(prompt),
            timeout=settings.generation_timeout_seconds,
        )
    except Exception as e:
        logger.exception("Error generating story")
        return classify_generation_error(e)

    if not story or not story.strip():
        logger.warning("Provider returned an empty story")
        return ErrorResponse(
            error=GENERIC_FAILURE_MESSAGE,
            code=ErrorCode.API_ERROR,
            retryable=True,
        )

    return StoryResponse(story=story.strip())
