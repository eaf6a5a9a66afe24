"""API client for communicating with the FastAPI backend."""

import logging
import os
from typing import Any

import httpx

from ghost_stories.api.models import ErrorResponse, GenerationResult, StoryResponse

logger = logging.getLogger(__name__)


def _get_id_token(audience: str) -> str | None:
    """Get ID token for Cloud Run service-to-service authentication.

    Args:
        audience: The URL of the target service.

    Returns:
        ID token string, or None if not running on GCP or token fetch fails.
    """
    try:
        import google.auth.transport.requests
        import google.oauth2.id_token

        request = google.auth.transport.requests.Request()
        return google.oauth2.id_token.fetch_id_token(request, audience)
    except Exception as e:
        logger.debug(f"Could not get ID token (likely running locally): {e}")
        return None


def parse_generation_result(data: dict[str, Any]) -> GenerationResult:
    """Parse the JSON body of POST /generate into a result model."""
    if "story" in data:
        return StoryResponse.model_validate(data)
    return ErrorResponse.model_validate(data)


class APIClient:
    """Client for the story generation API."""

    def __init__(self, base_url: str | None = None):
        """Initialize the API client.

        Args:
            base_url: Base URL of the API server. If not provided, uses API_URL env var
                     or defaults to http://localhost:8000.
        """
        self.base_url = base_url or os.environ.get("API_URL", "http://localhost:8000")
        self.timeout = 30.0  # Server-side deadline is 25 seconds

    def _get_auth_headers(self) -> dict[str, str]:
        """Get authentication headers for API requests.

        Returns:
            Headers dict with Authorization if running on GCP, empty dict otherwise.
        """
        token = _get_id_token(self.base_url)
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def health_check(self) -> bool:
        """Check if the API is healthy.

        Returns:
            True if API is healthy, False otherwise.
        """
        try:
            headers = self._get_auth_headers()
            with httpx.Client(timeout=5.0) as client:
                response = client.get(f"{self.base_url}/health", headers=headers)
                return response.status_code == 200
        except httpx.RequestError:
            return False

    def generate_story(self, prompt: str) -> GenerationResult:
        """Generate a ghost story.

        Args:
            prompt: Story prompt.

        Returns:
            StoryResponse or ErrorResponse as returned by the server.

        Raises:
            httpx.HTTPError: If the request fails or the server errors.
        """
        headers = self._get_auth_headers()
        with httpx.Client(timeout=self.timeout) as client:
            response = client.post(
                f"{self.base_url}/generate",
                json={"prompt": prompt},
                headers=headers,
            )
            response.raise_for_status()
            return parse_generation_result(response.json())
