"""In-flight generation tracking for browser sessions."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from ghost_stories.ui.state import GenerationInProgressError

logger = logging.getLogger(__name__)


class GenerationRegistry:
    """Tracks which sessions have a generation running.

    The session cookie only reaches the browser with the response, so a
    second request sent mid-generation still carries the old state. This
    in-process set is what refuses it.
    """

    def __init__(self) -> None:
        self._active: set[str] = set()

    def is_active(self, session_id: str) -> bool:
        return session_id in self._active

    @asynccontextmanager
    async def hold(self, session_id: str) -> AsyncIterator[None]:
        """Mark a session as generating for the duration of the block.

        Raises:
            GenerationInProgressError: If the session already has a generation running.
        """
        # No await between the check and the add
        if session_id in self._active:
            logger.warning(f"Refused overlapping generation for session {session_id[:8]}")
            raise GenerationInProgressError("A story is already being generated")
        self._active.add(session_id)
        try:
            yield
        finally:
            self._active.discard(session_id)


# Global registry instance
generation_registry = GenerationRegistry()
