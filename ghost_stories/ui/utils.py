"""Utility functions shared by the web and Streamlit front ends."""

import httpx

CLIENT_NETWORK_MESSAGE = "Network error. Please check your connection and try again."
CLIENT_TIMEOUT_MESSAGE = "Request timed out. Please try again."
CLIENT_UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again."

SLOW_WARNING_MESSAGE = "This is taking longer than usual. The spirits are still gathering..."


def describe_client_error(exc: BaseException) -> str:
    """Map an exception raised while calling the generator to a user message.

    Known httpx transport errors are recognised by type; anything else falls
    back to inspecting the exception text.

    Args:
        exc: Exception raised by the generation call.

    Returns:
        One of the network, timeout, or generic messages.
    """
    if isinstance(exc, httpx.TimeoutException):
        return CLIENT_TIMEOUT_MESSAGE
    if isinstance(exc, httpx.TransportError):
        return CLIENT_NETWORK_MESSAGE

    text = str(exc).lower()
    if "fetch" in text or "network" in text:
        return CLIENT_NETWORK_MESSAGE
    if "timeout" in text or "timed out" in text:
        return CLIENT_TIMEOUT_MESSAGE
    return CLIENT_UNEXPECTED_MESSAGE


def truncate_text(text: str, max_length: int = 100) -> str:
    """Truncate text to max length with ellipsis.

    Args:
        text: Text to truncate.
        max_length: Maximum length before truncation.

    Returns:
        Truncated text with ellipsis if needed.
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def split_paragraphs(story: str) -> list[str]:
    """Split story text into non-empty paragraphs for display."""
    return [p.strip() for p in story.split("\n\n") if p.strip()]
