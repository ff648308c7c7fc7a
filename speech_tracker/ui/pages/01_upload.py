"""
Upload page — analyze a pre-recorded audio file.
"""

import streamlit as st

from speech_tracker.ui.components.uploader import render_uploader

st.header("Upload")
render_uploader()
