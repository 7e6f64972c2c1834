"""Notes page: new-note form and a list with importance toggles."""

from __future__ import annotations

import requests
import streamlit as st

from ui.mirror import NotesMirror


def _ensure_mirror() -> NotesMirror | None:
    if "notes" not in st.session_state:
        mirror = NotesMirror()
        try:
            mirror.load()
        except requests.RequestException:
            st.error("Cannot reach the backend API.")
            return None
        st.session_state.notes = mirror
    return st.session_state.notes


def render() -> None:
    """Render the notes page."""
    st.title("🗒️ Notes")
    mirror = _ensure_mirror()
    if mirror is None:
        return

    notice = st.session_state.pop("notes_notice", None)
    if notice is not None:
        (st.error if notice.level == "error" else st.success)(notice.message)

    with st.form("add_note", clear_on_submit=True):
        content = st.text_input("content")
        important = st.checkbox("important")
        if st.form_submit_button("save"):
            st.session_state.notes_notice = mirror.add(content, important)
            st.rerun()

    only_important = st.toggle("show important only")
    query = st.text_input("filter", key="notes_filter")
    shown = mirror.filtered(query)
    if only_important:
        shown = [n for n in shown if n["important"]]

    _render_pending_delete(mirror)

    for note in shown:
        col_text, col_toggle, col_delete = st.columns([5, 2, 1])
        col_text.write(f"**{note['content']}**" if note["important"] else note["content"])
        label = "make not important" if note["important"] else "make important"
        if col_toggle.button(label, key=f"toggle_note_{note['id']}"):
            st.session_state.notes_notice = mirror.toggle_importance(note)
            st.rerun()
        if col_delete.button("delete", key=f"delete_note_{note['id']}"):
            st.session_state.pending_delete_note = note
            st.rerun()


def _render_pending_delete(mirror: NotesMirror) -> None:
    pending = st.session_state.get("pending_delete_note")
    if not pending:
        return
    st.warning(f"Delete {pending['content']}?")
    col_yes, col_no = st.columns(2)
    if col_yes.button("Delete", key="confirm_delete_note", use_container_width=True):
        st.session_state.pop("pending_delete_note")
        st.session_state.notes_notice = mirror.remove(pending, confirm=lambda _: True)
        st.rerun()
    if col_no.button("Cancel", key="cancel_delete_note", use_container_width=True):
        st.session_state.pop("pending_delete_note")
        st.rerun()
