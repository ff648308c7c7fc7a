"""
Speech Tracker Streamlit UI — main entry point.

Run with: ``streamlit run speech_tracker/ui/app.py``
"""

import streamlit as st

from speech_tracker.ui.session import current_client, init_session

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Speech Tracker",
    page_icon="\U0001f5e3️",
    layout="centered",
)

init_session()

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f5e3️ Speech Tracker")
    st.caption("Record or upload a speech and get feedback")
    st.divider()
    st.session_state.api_base_url = st.text_input(
        "Backend API URL",
        value=st.session_state.api_base_url,
        help="URL of the Speech Tracker FastAPI backend server",
    )

    _conn_ok, _conn_msg = current_client().check_connection()
    if _conn_ok:
        st.success(f"Backend: {_conn_msg}")
    else:
        st.error(f"Backend: {_conn_msg}")

# ---------------------------------------------------------------------------
# Navigation (multipage)
# ---------------------------------------------------------------------------
upload_page = st.Page(
    "pages/01_upload.py",
    title="Upload",
    icon="\U0001f4c2",
    default=True,
)
practice_page = st.Page(
    "pages/02_practice.py",
    title="Practice",
    icon="\U0001f3a4",
)

nav = st.navigation([upload_page, practice_page])
nav.run()
