"""Classification of provider failures into user-facing error results."""

import asyncio
import errno
import logging
import socket

import httpx
import openai

from ghost_stories.api.models import ErrorCode, ErrorResponse

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Story generation is taking too long. Please try again with a simpler prompt."
RATE_LIMIT_MESSAGE = "Too many requests. Please wait a moment and try again."
UNAVAILABLE_MESSAGE = "Story generation is temporarily unavailable. Please try again later."
BAD_REQUEST_MESSAGE = "Invalid prompt. Please try a different prompt."
SERVER_ERROR_MESSAGE = (
    "The story service is temporarily unavailable. Please try again in a few moments."
)
NETWORK_MESSAGE = "Network error. Please check your connection and try again."
GENERIC_FAILURE_MESSAGE = "Failed to generate story. Please try again."
UNKNOWN_MESSAGE = "An unexpected error occurred. Please try again."

# Node-style resolver/connection codes some clients still report in `code`
_CONNECTIVITY_CODES = {"ENOTFOUND", "ECONNREFUSED"}
_CONNECTIVITY_ERRNOS = {errno.ECONNREFUSED}


class GenerationTimeoutError(Exception):
    """Raised when the provider call misses the generation deadline."""

    def __init__(self, timeout: float):
        super().__init__("Request timeout")
        self.timeout = timeout


def _status_of(exc: BaseException) -> int | None:
    """Extract an HTTP status reported by the provider client, if any."""
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value

    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value
    return None


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(
        exc,
        (
            GenerationTimeoutError,
            asyncio.TimeoutError,
            TimeoutError,
            openai.APITimeoutError,
            httpx.TimeoutException,
        ),
    ):
        return True
    return str(exc) == "Request timeout"


def _is_connectivity_failure(exc: BaseException) -> bool:
    if isinstance(
        exc,
        (openai.APIConnectionError, httpx.TransportError, ConnectionError, socket.gaierror),
    ):
        return True
    if getattr(exc, "code", None) in _CONNECTIVITY_CODES:
        return True
    if isinstance(exc, OSError) and exc.errno in _CONNECTIVITY_ERRNOS:
        return True
    return "fetch" in str(exc)


def classify_generation_error(exc: BaseException) -> ErrorResponse:
    """Map a raised provider failure to an error result.

    Structured fields (exception type, reported status, errno) are checked
    first; the message text is only consulted for the timeout marker and the
    generic "fetch" failure.

    Args:
        exc: The exception raised while generating.

    Returns:
        ErrorResponse with code and retryable flag set by precedence:
        timeout, 429, 401/403, 400, 5xx, connectivity, other status, unknown.
    """
    if _is_timeout(exc):
        return ErrorResponse(error=TIMEOUT_MESSAGE, code=ErrorCode.TIMEOUT, retryable=True)

    status = _status_of(exc)

    if status == 429:
        return ErrorResponse(error=RATE_LIMIT_MESSAGE, code=ErrorCode.API_ERROR, retryable=True)

    if status in (401, 403):
        logger.error(f"Provider rejected the credential (status {status})")
        return ErrorResponse(error=UNAVAILABLE_MESSAGE, code=ErrorCode.API_ERROR, retryable=True)

    if status == 400:
        return ErrorResponse(
            error=BAD_REQUEST_MESSAGE, code=ErrorCode.VALIDATION_ERROR, retryable=False
        )

    if status is not None and status >= 500:
        return ErrorResponse(error=SERVER_ERROR_MESSAGE, code=ErrorCode.API_ERROR, retryable=True)

    if _is_connectivity_failure(exc):
        return ErrorResponse(error=NETWORK_MESSAGE, code=ErrorCode.API_ERROR, retryable=True)

    if status is not None:
        return ErrorResponse(
            error=GENERIC_FAILURE_MESSAGE, code=ErrorCode.API_ERROR, retryable=True
        )

    return ErrorResponse(error=UNKNOWN_MESSAGE, code=ErrorCode.UNKNOWN, retryable=True)
