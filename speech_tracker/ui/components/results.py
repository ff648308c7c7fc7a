"""
Results panel — renders a ``PipelineState`` snapshot.

Pure display: reruns redraw the stored state and never call the backend.
"""

import streamlit as st

from speech_tracker.core.models import PipelineStatus
from speech_tracker.services.pipeline import PipelineState


def render_results(state: PipelineState) -> None:
    """Draw the transcript, feedback, or error for the current run."""
    if state.status == PipelineStatus.idle:
        return

    if state.status in (PipelineStatus.capturing, PipelineStatus.processing):
        st.info("Analyzing your speech...")
        return

    if state.transcript:
        st.subheader("Transcription")
        st.write(state.transcript)

    if state.status == PipelineStatus.failed:
        st.error(state.error or "Something went wrong. Please try again.")
        return

    st.subheader("Feedback")
    st.write(state.feedback)
