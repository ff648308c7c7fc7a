"""
Practice component — generate a paragraph, read it aloud, get feedback.

The recorder widget keeps returning the same clip on every rerun, so the
digest of the last submitted clip is remembered and a clip is submitted
at most once.
"""

import hashlib
import logging

import streamlit as st

from speech_tracker.core.exceptions import PipelineBusyError, SpeechTrackerError
from speech_tracker.core.models import ParagraphStyle
from speech_tracker.services.audio.source import from_recording
from speech_tracker.ui.components.results import render_results
from speech_tracker.ui.session import current_client, get_pipeline

logger = logging.getLogger(__name__)


def _render_paragraph_controls() -> None:
    st.markdown("Need something to read? Generate a practice paragraph.")
    cols = st.columns(len(ParagraphStyle))
    for col, style in zip(cols, ParagraphStyle, strict=True):
        with col:
            if st.button(f"{style.value} paragraph", use_container_width=True):
                try:
                    with st.spinner("Generating paragraph..."):
                        st.session_state.paragraph = current_client().generate_paragraph(style)
                    st.session_state.paragraph_error = None
                except SpeechTrackerError as exc:
                    st.session_state.paragraph_error = exc.detail

    if st.session_state.paragraph_error:
        st.error(st.session_state.paragraph_error)
    elif st.session_state.paragraph:
        st.subheader("Read this aloud")
        st.write(st.session_state.paragraph)


def _submit_recording(audio_bytes: bytes, media_type: str | None) -> None:
    pipeline = get_pipeline()
    try:
        pipeline.begin_capture()
        payload = from_recording(audio_bytes, media_type or "audio/wav")
        with st.spinner("Transcribing and generating feedback..."):
            pipeline.submit(payload)
    except PipelineBusyError as exc:
        st.warning(exc.detail)
    except SpeechTrackerError as exc:
        pipeline.fail_capture(exc)


def render_practice() -> None:
    """Render paragraph generation, the recorder, and the last result."""
    _render_paragraph_controls()
    st.divider()

    audio = st.audio_input("Record your speech")
    if audio is not None:
        audio_bytes = audio.getvalue()
        digest = hashlib.sha256(audio_bytes).hexdigest()
        if digest != st.session_state.last_capture_digest:
            st.session_state.last_capture_digest = digest
            logger.info("Submitting browser recording (%d bytes)", len(audio_bytes))
            _submit_recording(audio_bytes, audio.type)

    render_results(get_pipeline().state)
