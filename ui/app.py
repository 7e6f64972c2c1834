"""Phonebook & Notes - Streamlit client.

Run with:
    streamlit run ui/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so `ui.*` imports resolve
# regardless of the working directory Streamlit uses.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

st.set_page_config(
    page_title="Phonebook",
    page_icon="📒",
    layout="wide",
)

from ui import api  # noqa: E402
from ui.components import notes, phonebook  # noqa: E402

page = st.navigation(
    [
        st.Page(phonebook.render, title="Phonebook", icon="📒", default=True, url_path="phonebook"),
        st.Page(notes.render, title="Notes", icon="🗒️", url_path="notes"),
    ]
)

with st.sidebar:
    if st.button("Reload from server", use_container_width=True):
        st.session_state.pop("phonebook", None)
        st.session_state.pop("notes", None)
        st.rerun()

page.run()

st.divider()
try:
    st.html(api.get_info())
except Exception:
    st.caption("Backend unavailable")
