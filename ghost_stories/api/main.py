"""FastAPI application serving the ghost story page and generation API."""

import logging
import os
from uuid import uuid4
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware
from starlette.status import HTTP_409_CONFLICT

from ghost_stories.api.models import ErrorResponse, GenerateStoryRequest, StoryResponse
from ghost_stories.api.sessions import generation_registry
from ghost_stories.config import get_openai_api_key, get_settings
from ghost_stories.stories.generator import generate_ghost_story
from ghost_stories.ui.state import (
    GenerationInProgressError,
    InvalidPromptError,
    InvalidTransitionError,
    SessionState,
    SubmissionController,
)
from ghost_stories.ui.utils import SLOW_WARNING_MESSAGE, split_paragraphs, truncate_text

# Configure logging for Cloud Run
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SESSION_KEY = "story_session"
SESSION_ID_KEY = "session_id"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Check configuration on startup."""
    logger.info("Starting ghost story API...")
    if not get_openai_api_key():
        # Requests still get a retryable API_ERROR, the app stays up
        logger.warning("OPENAI_API_KEY is not configured; generation will be unavailable")

    yield

    logger.info("Shutting down ghost story API...")


app = FastAPI(
    title="AI Ghost Story Generator API",
    description="Generates short ghost stories from a prompt",
    version="0.1.0",
    lifespan=lifespan,
)

settings = get_settings()

# Holds the page's SessionState between htmx requests
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret_key or "dev-secret-key-change-in-production",
    max_age=86400,  # 24 hours
    same_site="lax",
    https_only=settings.is_production,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")
app.state.templates = templates


def _session_id(request: Request) -> str:
    return request.session.setdefault(SESSION_ID_KEY, uuid4().hex)


def _load_controller(request: Request) -> SubmissionController:
    data = request.session.get(SESSION_KEY)
    state = SessionState.model_validate(data) if data else SessionState()
    return SubmissionController(state)


def _save_controller(request: Request, controller: SubmissionController) -> None:
    # The story stays out of the cookie, browsers drop cookies over ~4 KB
    request.session[SESSION_KEY] = controller.state.model_dump(
        mode="json", exclude={"current_story"}
    )


def _result_context(
    controller: SubmissionController,
    validation_error: str | None = None,
) -> dict[str, Any]:
    state = controller.state
    return {
        "phase": controller.phase.value,
        "paragraphs": split_paragraphs(state.current_story) if state.current_story else [],
        "error": state.error,
        "error_code": state.error_code.value if state.error_code else None,
        "retryable": state.retryable,
        "last_prompt": state.last_prompt,
        "validation_error": validation_error,
    }


@app.get("/")
async def index(request: Request):
    """Render the single page. A full page load starts a fresh session state."""
    _session_id(request)
    controller = SubmissionController()
    _save_controller(request, controller)
    context = {
        "min_length": settings.prompt_min_length,
        "max_length": settings.prompt_max_length,
        "slow_warning_ms": int(settings.slow_warning_seconds * 1000),
        "slow_warning_message": SLOW_WARNING_MESSAGE,
    }
    return templates.TemplateResponse(request, "index.html", context)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/generate", response_model=StoryResponse | ErrorResponse)
async def generate_story(body: GenerateStoryRequest) -> StoryResponse | ErrorResponse:
    """Generate a ghost story from a prompt.

    Failures are part of the result: the body carries either `story` or
    `error`, `code` and `retryable`, always with status 200.
    """
    logger.info(f"Story requested: {truncate_text(body.prompt, max_length=40)!r}")
    return await generate_ghost_story(body.prompt)


@app.post("/ui/generate")
async def ui_generate(request: Request):
    """Submit the prompt form and return the result partial for HTMX.

    Args:
        request: FastAPI request with form data.

    Returns:
        HTML partial with the story, the error, or the validation message.
    """
    form_data = await request.form()
    prompt = str(form_data.get("prompt", ""))

    controller = _load_controller(request)
    validation_error = None
    try:
        async with generation_registry.hold(_session_id(request)):
            await controller.arun(prompt, generate_ghost_story)
    except InvalidPromptError as e:
        validation_error = e.message
    except InvalidTransitionError as e:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail=str(e)) from e

    _save_controller(request, controller)
    return templates.TemplateResponse(
        request,
        "partials/result.html",
        _result_context(controller, validation_error),
    )


@app.post("/ui/retry")
async def ui_retry(request: Request):
    """Resubmit the last prompt after a retryable failure.

    Raises:
        HTTPException: 409 if the session has no retryable failure or a generation
            is already running.
    """
    controller = _load_controller(request)
    try:
        async with generation_registry.hold(_session_id(request)):
            await controller.arun_retry(generate_ghost_story)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail=str(e)) from e

    _save_controller(request, controller)
    return templates.TemplateResponse(request, "partials/result.html", _result_context(controller))


@app.post("/ui/reset")
async def ui_reset(request: Request):
    """Clear the story or error without generating (Start Over / Generate New)."""
    controller = _load_controller(request)
    try:
        if generation_registry.is_active(_session_id(request)):
            raise GenerationInProgressError("Cannot start over while generating")
        controller.start_over()
    except InvalidTransitionError as e:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail=str(e)) from e

    _save_controller(request, controller)
    return templates.TemplateResponse(request, "partials/result.html", _result_context(controller))
