"""Phonebook page: filter, add-or-replace form, and contact table."""

from __future__ import annotations

import requests
import streamlit as st

from ui.mirror import Notification, PhonebookMirror


def _ensure_mirror() -> PhonebookMirror | None:
    """Load the collection once per browser session."""
    if "phonebook" not in st.session_state:
        mirror = PhonebookMirror()
        try:
            mirror.load()
        except requests.RequestException:
            st.error(
                "Cannot reach the backend API. "
                "Make sure the FastAPI server is running on port 3001."
            )
            return None
        st.session_state.phonebook = mirror
    return st.session_state.phonebook


def _notify(notice: Notification | None) -> None:
    if notice is not None:
        st.session_state.phonebook_notice = notice


def _render_notice() -> None:
    notice = st.session_state.pop("phonebook_notice", None)
    if notice is None:
        return
    if notice.level == "error":
        st.error(notice.message)
    else:
        st.success(notice.message)


def _render_form(mirror: PhonebookMirror) -> None:
    """Add a contact; an existing name needs an explicit replace click."""
    with st.form("add_contact", clear_on_submit=True):
        name = st.text_input("name", key="contact_name")
        number = st.text_input("number", key="contact_number")
        submitted = st.form_submit_button("add")

    if submitted:
        st.session_state.pop("pending_replace", None)
        if mirror.find_by_name(name) is None:
            _notify(mirror.submit(name, number, confirm=lambda _: True))
            st.rerun()
        st.session_state.pending_replace = {"name": name, "number": number}

    pending = st.session_state.get("pending_replace")
    if not pending:
        return
    st.warning(
        f"{pending['name']} is already added to phonebook, "
        "replace the old number with the new one?"
    )
    col_yes, col_no = st.columns(2)
    if col_yes.button("Replace", key="confirm_replace", use_container_width=True):
        st.session_state.pop("pending_replace")
        _notify(mirror.submit(pending["name"], pending["number"], confirm=lambda _: True))
        st.rerun()
    if col_no.button("Cancel", key="cancel_replace", use_container_width=True):
        st.session_state.pop("pending_replace")
        st.rerun()


def _render_pending_delete(mirror: PhonebookMirror) -> None:
    """Ask before a delete click reaches the server."""
    pending = st.session_state.get("pending_delete_person")
    if not pending:
        return
    st.warning(f"Delete {pending['name']}?")
    col_yes, col_no = st.columns(2)
    if col_yes.button("Delete", key="confirm_delete_person", use_container_width=True):
        st.session_state.pop("pending_delete_person")
        _notify(mirror.remove(pending, confirm=lambda _: True))
        st.rerun()
    if col_no.button("Cancel", key="cancel_delete_person", use_container_width=True):
        st.session_state.pop("pending_delete_person")
        st.rerun()


def _render_contacts(mirror: PhonebookMirror, query: str) -> None:
    contacts = mirror.filtered(query)
    if not contacts:
        st.info("No contacts match the filter.")
        return
    for contact in contacts:
        col_name, col_number, col_action = st.columns([3, 3, 1])
        col_name.write(contact["name"])
        col_number.write(contact["number"])
        if col_action.button("delete", key=f"delete_person_{contact['id']}"):
            st.session_state.pending_delete_person = contact
            st.rerun()


def render() -> None:
    """Render the phonebook page."""
    st.title("📒 Phonebook")
    mirror = _ensure_mirror()
    if mirror is None:
        return

    _render_notice()
    query = st.text_input("filter shown with", key="phonebook_filter")

    st.subheader("Add a new contact")
    _render_form(mirror)

    st.subheader("Contacts")
    _render_pending_delete(mirror)
    _render_contacts(mirror, query)
