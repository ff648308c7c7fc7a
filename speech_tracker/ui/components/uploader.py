"""
Upload component — pick an audio file and analyze it.

States: idle -> processing -> succeeded | failed
"""

import logging

import streamlit as st

from speech_tracker.core.exceptions import PipelineBusyError
from speech_tracker.services.audio.source import ALLOWED_EXTENSIONS
from speech_tracker.ui.components.results import render_results
from speech_tracker.ui.session import get_pipeline

logger = logging.getLogger(__name__)


def render_uploader() -> None:
    """Render the file picker, the analyze button, and the last result."""
    pipeline = get_pipeline()

    files = st.file_uploader(
        "Upload a recording of your speech",
        type=sorted(ALLOWED_EXTENSIONS),
        accept_multiple_files=True,
        help="Only the first selected file is analyzed.",
    )

    if st.button("Analyze", type="primary", disabled=pipeline.state.is_busy):
        try:
            with st.spinner("Transcribing and generating feedback..."):
                pipeline.process_upload(files)
        except PipelineBusyError as exc:
            logger.warning("Analyze clicked while a run is processing")
            st.warning(exc.detail)

    render_results(pipeline.state)
