"""
Practice page — read a generated paragraph aloud and get feedback.

Uses ``st.audio_input()`` for in-browser microphone capture.
"""

import streamlit as st

from speech_tracker.ui.components.practice import render_practice

st.header("Practice")
render_practice()
