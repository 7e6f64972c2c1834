"""Client-side mirrors of the server collections.

A mirror is an advisory copy of one collection. It is filled once on load,
filtered locally, and patched with the record the server returns after each
mutation instead of being reloaded.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Literal, Optional

import requests

from ui import api

Confirm = Callable[[str], bool]


@dataclass
class Notification:
    """Transient message shown after a mutation."""

    message: str
    level: Literal["info", "error"] = "info"


def filter_records(
    records: list[dict[str, Any]], query: str, field: str
) -> list[dict[str, Any]]:
    """Records whose ``field`` contains ``query``, ignoring case."""
    needle = query.lower()
    return [r for r in records if needle in str(r.get(field, "")).lower()]


def _is_not_found(exc: requests.HTTPError) -> bool:
    return exc.response is not None and exc.response.status_code == 404


class RecordMirror:
    """Local copy of one collection, kept in sync by record id."""

    def __init__(self, resource: str, text_field: str, client: ModuleType = api) -> None:
        self.resource = resource
        self.text_field = text_field
        self.client = client
        self.records: list[dict[str, Any]] = []

    def load(self) -> None:
        """Replace the mirror with the server's current collection."""
        self.records = list(self.client.get_all(self.resource))

    def filtered(self, query: str) -> list[dict[str, Any]]:
        return filter_records(self.records, query, self.text_field)

    def apply(self, record: dict[str, Any]) -> None:
        """Insert ``record`` or replace the entry with the same id in place."""
        for index, current in enumerate(self.records):
            if current["id"] == record["id"]:
                self.records[index] = record
                return
        self.records.append(record)

    def discard(self, record_id: Any) -> None:
        self.records = [r for r in self.records if r["id"] != record_id]

    def remove(self, record: dict[str, Any], confirm: Confirm) -> Optional[Notification]:
        """Delete ``record`` after confirmation.

        A 404 from a strict server still drops the record locally since it
        is gone either way.
        """
        label = record[self.text_field]
        if not confirm(f"Delete {label}?"):
            return None
        try:
            self.client.delete(self.resource, record["id"])
        except requests.HTTPError as exc:
            if not _is_not_found(exc):
                return Notification(api.error_message(exc), "error")
        self.discard(record["id"])
        return Notification(f"Deleted {label}")


class PhonebookMirror(RecordMirror):
    """Contacts mirror with name-based upsert-by-confirmation."""

    def __init__(self, client: ModuleType = api) -> None:
        super().__init__("persons", "name", client)

    def find_by_name(self, name: str) -> Optional[dict[str, Any]]:
        return next((r for r in self.records if r["name"] == name), None)

    def submit(self, name: str, number: str, confirm: Confirm) -> Optional[Notification]:
        """Create a contact, or replace the number of an existing one.

        When a contact with exactly the same name is mirrored, the user is
        asked first and nothing happens if they decline.
        """
        fields = {"name": name, "number": number}
        existing = self.find_by_name(name)

        if existing is None:
            try:
                created = self.client.create(self.resource, fields)
            except requests.HTTPError as exc:
                return Notification(api.error_message(exc), "error")
            self.apply(created)
            return Notification(f"Added {created['name']}")

        question = (
            f"{name} is already added to phonebook, "
            "replace the old number with the new one?"
        )
        if not confirm(question):
            return None
        try:
            updated = self.client.update(self.resource, existing["id"], fields)
        except requests.HTTPError as exc:
            if _is_not_found(exc):
                self.discard(existing["id"])
                return Notification(
                    f"Information of {name} has already been removed from server",
                    "error",
                )
            return Notification(api.error_message(exc), "error")
        self.apply(updated)
        return Notification(f"Updated {updated['name']}")


class NotesMirror(RecordMirror):
    """Notes mirror with creation and importance toggling."""

    def __init__(self, client: ModuleType = api) -> None:
        super().__init__("notes", "content", client)

    def add(self, content: str, important: Optional[bool] = None) -> Notification:
        fields: dict[str, Any] = {"content": content}
        if important is not None:
            fields["important"] = important
        try:
            created = self.client.create(self.resource, fields)
        except requests.HTTPError as exc:
            return Notification(api.error_message(exc), "error")
        self.apply(created)
        return Notification(f"Added note '{created['content']}'")

    def toggle_importance(self, note: dict[str, Any]) -> Optional[Notification]:
        fields = {"content": note["content"], "important": not note["important"]}
        try:
            updated = self.client.update(self.resource, note["id"], fields)
        except requests.HTTPError as exc:
            if _is_not_found(exc):
                self.discard(note["id"])
                return Notification(
                    f"Note '{note['content']}' was already removed from server",
                    "error",
                )
            return Notification(api.error_message(exc), "error")
        self.apply(updated)
        return None
