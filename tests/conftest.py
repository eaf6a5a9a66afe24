"""Pytest configuration and fixtures."""

import os

import pytest


def pytest_configure(config):
    """Set up test environment variables before tests run."""
    os.environ.setdefault("OPENAI_API_KEY", "test-key")
    os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")
    os.environ.setdefault("ENVIRONMENT", "test")
    # Keep Secret Manager out of the lookup chain
    os.environ.pop("GOOGLE_PROJECT_ID", None)


@pytest.fixture
def mock_settings():
    """Provide mock settings for testing."""
    from ghost_stories.config import Settings

    return Settings(
        openai_api_key="test-key",
        session_secret_key="test-session-secret",
    )


@pytest.fixture
def client():
    """Create test client for the FastAPI app."""
    from fastapi.testclient import TestClient

    from ghost_stories.api.main import app

    return TestClient(app)
