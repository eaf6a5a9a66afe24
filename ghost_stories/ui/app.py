"""Streamlit web application for ghost story generation."""

import concurrent.futures

import streamlit as st

from ghost_stories.api.models import GenerationResult
from ghost_stories.config import settings
from ghost_stories.ui.api_client import APIClient
from ghost_stories.ui.state import InvalidPromptError, SubmissionController
from ghost_stories.ui.utils import SLOW_WARNING_MESSAGE, split_paragraphs

# Page configuration
st.set_page_config(
    page_title="AI Ghost Story Generator",
    page_icon="👻",
    layout="centered",
)

api_client = APIClient(base_url=settings.api_url)


def init_session_state():
    """Initialize session state variables."""
    if "controller" not in st.session_state:
        st.session_state.controller = SubmissionController()


def get_controller() -> SubmissionController:
    return st.session_state.controller


def generate_with_slow_warning(prompt: str) -> GenerationResult:
    """Call the API, showing a notice if it is still running after the delay."""
    controller = get_controller()
    warning_container = st.empty()
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(api_client.generate_story, prompt)
        try:
            return future.result(timeout=settings.slow_warning_seconds)
        except concurrent.futures.TimeoutError:
            if controller.mark_slow():
                warning_container.warning(f"⏳ {SLOW_WARNING_MESSAGE}")
            return future.result()
    finally:
        warning_container.empty()
        executor.shutdown(wait=False)


def render_sidebar():
    """Render sidebar with API status."""
    with st.sidebar:
        st.subheader("API status")
        if api_client.health_check():
            st.success("✅ API connected")
        else:
            st.error("❌ API unreachable")
            st.caption("Start the API server first")

        st.divider()
        st.caption("AI Ghost Story Generator v0.1.0")


def render_prompt_form():
    """Render the prompt form and handle submission."""
    controller = get_controller()

    with st.form("prompt_form"):
        prompt = st.text_input(
            "Prompt",
            max_chars=settings.prompt_max_length,
            placeholder="Enter your horror prompt... (e.g., abandoned house, witch forest, lost child)",
            label_visibility="collapsed",
            disabled=controller.state.is_generating,
        )
        submitted = st.form_submit_button(
            "Generate Ghost Story",
            type="primary",
            disabled=controller.state.is_generating,
            use_container_width=True,
        )

    if submitted:
        try:
            with st.spinner("Conjuring your tale... The spirits are gathering..."):
                controller.run(prompt, generate_with_slow_warning)
        except InvalidPromptError as e:
            st.error(f"⚠️ {e.message}")


def render_result():
    """Render the story or the error with its actions."""
    controller = get_controller()
    state = controller.state

    if state.current_story is not None:
        with st.container(border=True):
            for paragraph in split_paragraphs(state.current_story):
                st.markdown(paragraph)

        if st.button("Generate New Story"):
            controller.start_over()
            st.rerun()

    elif state.error is not None:
        st.error(f"**Error Generating Story**\n\n{state.error}")

        col1, col2 = st.columns(2)
        with col1:
            if state.retryable and st.button("Retry", type="primary"):
                with st.spinner("Conjuring your tale... The spirits are gathering..."):
                    controller.run_retry(generate_with_slow_warning)
                st.rerun()
        with col2:
            if st.button("Start Over"):
                controller.start_over()
                st.rerun()


def main():
    """Main application entry point."""
    init_session_state()

    st.title("👻 AI Ghost Story Generator")
    st.caption("Enter a prompt and let the spirits weave a chilling tale...")

    render_sidebar()
    render_prompt_form()
    render_result()


if __name__ == "__main__":
    main()
