"""LLM factory for the story generation chain."""

from langchain_openai import ChatOpenAI

from ghost_stories.config import settings


def get_llm(api_key: str, temperature: float | None = None) -> ChatOpenAI:
    """Get a chat model configured with the fixed sampling constants.

    Args:
        api_key: Provider credential resolved for this call.
        temperature: Override default temperature. If None, uses settings.llm_temperature.

    Returns:
        ChatOpenAI instance. Client-side retries are disabled so that a single
        request races the generation deadline.
    """
    temp = temperature if temperature is not None else settings.llm_temperature

    return ChatOpenAI(
        model=settings.llm_model,
        api_key=api_key,
        temperature=temp,
        top_p=settings.llm_top_p,
        max_tokens=settings.llm_max_tokens,
        max_retries=0,
    )
