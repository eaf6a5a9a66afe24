"""Tests for the FastAPI REST API."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_check_returns_ok(self):
        """Test that health check returns OK status."""
        from ghost_stories.api.main import app

        client = TestClient(app)
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestGenerateEndpoint:
    """Test story generation endpoint."""

    def test_generate_returns_story(self, client: TestClient):
        """A successful generation returns only the story key."""
        from ghost_stories.api.models import StoryResponse

        with patch(
            "ghost_stories.api.main.generate_ghost_story",
            new_callable=AsyncMock,
            return_value=StoryResponse(story="The floorboards remembered her footsteps."),
        ) as mock_generate:
            response = client.post("/generate", json={"prompt": "abandoned house"})

        assert response.status_code == 200
        assert response.json() == {"story": "The floorboards remembered her footsteps."}
        mock_generate.assert_awaited_once_with("abandoned house")

    def test_generate_returns_error_result_with_200(self, client: TestClient):
        """A failed generation is a result, not an HTTP error."""
        from ghost_stories.api.models import ErrorCode, ErrorResponse

        with patch(
            "ghost_stories.api.main.generate_ghost_story",
            new_callable=AsyncMock,
            return_value=ErrorResponse(
                error="Failed to generate story. Please try again.",
                code=ErrorCode.API_ERROR,
                retryable=True,
            ),
        ):
            response = client.post("/generate", json={"prompt": "haunted forest"})

        assert response.status_code == 200
        assert response.json() == {
            "error": "Failed to generate story. Please try again.",
            "code": "API_ERROR",
            "retryable": True,
        }

    def test_generate_short_prompt_is_validation_error(self, client: TestClient):
        """Out-of-range prompts come back as VALIDATION_ERROR, not 422."""
        response = client.post("/generate", json={"prompt": "ab"})

        assert response.status_code == 200
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert data["retryable"] is False
        assert "story" not in data

    def test_generate_missing_prompt_is_422(self, client: TestClient):
        """A body without a prompt field is rejected by request validation."""
        response = client.post("/generate", json={})

        assert response.status_code == 422


class TestAPIModels:
    """Test API models."""

    def test_error_code_enum(self):
        """Test ErrorCode enum values."""
        from ghost_stories.api.models import ErrorCode

        assert ErrorCode.VALIDATION_ERROR.value == "VALIDATION_ERROR"
        assert ErrorCode.API_ERROR.value == "API_ERROR"
        assert ErrorCode.TIMEOUT.value == "TIMEOUT"
        assert ErrorCode.UNKNOWN.value == "UNKNOWN"

    def test_generate_request_model(self):
        """Test GenerateStoryRequest keeps the prompt as given."""
        from ghost_stories.api.models import GenerateStoryRequest

        request = GenerateStoryRequest(prompt="  witch forest ")

        assert request.prompt == "  witch forest "

    def test_error_response_model(self):
        """Test ErrorResponse model."""
        from ghost_stories.api.models import ErrorCode, ErrorResponse

        error = ErrorResponse(error="Request timed out", code="TIMEOUT", retryable=True)

        assert error.code is ErrorCode.TIMEOUT
        assert error.model_dump(mode="json") == {
            "error": "Request timed out",
            "code": "TIMEOUT",
            "retryable": True,
        }
