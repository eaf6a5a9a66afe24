"""Tests for HTMX form components."""

from fastapi.testclient import TestClient


class TestIndexPage:
    """Test index page content and structure."""

    def test_page_title(self):
        """GET / returns page with title 'AI Ghost Story Generator'."""
        from ghost_stories.api.main import app

        client = TestClient(app)
        response = client.get("/")

        assert response.status_code == 200
        assert "<title>AI Ghost Story Generator</title>" in response.text

    def test_main_content_area(self):
        """GET / returns page with main content area and heading."""
        from ghost_stories.api.main import app

        client = TestClient(app)
        response = client.get("/")

        html = response.text
        assert "<main" in html
        assert "<h1>" in html and "AI Ghost Story Generator" in html


class TestPromptInput:
    """Test prompt input and its counter."""

    def test_prompt_input(self, client: TestClient):
        """Index page contains the prompt input limited to 200 characters."""
        response = client.get("/")

        html = response.text
        assert 'name="prompt"' in html
        assert 'maxlength="200"' in html
        assert "Enter your horror prompt..." in html

    def test_character_count(self, client: TestClient):
        """Index page shows the character counter starting at zero."""
        response = client.get("/")

        assert 'id="char-count"' in response.text
        assert "0/200" in response.text

    def test_validation_bounds_exposed_to_script(self, client: TestClient):
        """The form carries the bounds and slow warning delay for the page script."""
        response = client.get("/")

        html = response.text
        assert 'data-min-length="3"' in html
        assert 'data-max-length="200"' in html
        assert 'data-slow-warning-ms="15000"' in html


class TestGenerateButton:
    """Test generate button with HTMX attributes."""

    def test_generate_form_htmx_attrs(self, client: TestClient):
        """Form posts to /ui/generate and swaps the result container."""
        response = client.get("/")

        html = response.text
        assert 'hx-post="/ui/generate"' in html
        assert 'hx-target="#result"' in html
        assert 'hx-swap="innerHTML"' in html
        assert '<div id="result"' in html

    def test_submit_disabled_while_generating(self, client: TestClient):
        """Input and button are disabled during the request."""
        response = client.get("/")

        assert 'hx-disabled-elt="#prompt-input, #generate-button"' in response.text
        assert "Summoning Story..." in response.text

    def test_loading_indicator(self, client: TestClient):
        """Loading indicator and hidden slow warning are on the page."""
        response = client.get("/")

        html = response.text
        assert 'hx-indicator="#loading"' in html
        assert "Conjuring your tale" in html
        assert 'id="slow-warning"' in html
