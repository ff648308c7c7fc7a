"""
Per-session UI state.

Every browser session gets its own ``PipelineController`` stored in
``st.session_state``; nothing pipeline-related is shared between sessions.
"""

import streamlit as st

from speech_tracker.core.config import get_settings
from speech_tracker.services.pipeline import PipelineController
from speech_tracker.ui.api_client import APIClient, get_api_client

_DEFAULTS = {
    "paragraph": None,
    "paragraph_error": None,
    "last_capture_digest": None,
}


def init_session() -> None:
    """Populate session defaults once per browser session."""
    settings = get_settings()
    if "api_base_url" not in st.session_state:
        st.session_state["api_base_url"] = settings.api_base_url
    for key, value in _DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value


def current_client() -> APIClient:
    base_url = st.session_state.get("api_base_url") or get_settings().api_base_url
    return get_api_client(base_url, get_settings().api_timeout)


def get_pipeline() -> PipelineController:
    """Return this session's controller, rebinding it when the backend URL changes."""
    client = current_client()
    pipeline = st.session_state.get("pipeline")
    if pipeline is None or st.session_state.get("_pipeline_client") is not client:
        pipeline = PipelineController(client)
        st.session_state["pipeline"] = pipeline
        st.session_state["_pipeline_client"] = client
    return pipeline
