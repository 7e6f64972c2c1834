"""Pydantic models and field rules for phonebook contacts and notes."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Callable, Union

from pydantic import BaseModel, Field

from store.errors import ValidationFailed

# In-memory stores hand out integers, the document store hands out UUID strings.
RecordId = Union[int, str]

MISSING_CONTENT = "content missing"


def timestamp_now() -> str:
    """Current UTC instant as ``2019-05-30T17:30:31.098Z``."""
    return (
        datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


class Contact(BaseModel):
    """A single phonebook entry."""

    id: RecordId
    name: str = Field(..., min_length=1, description="Contact name")
    number: str = Field(..., min_length=1, description="Phone number")


class Note(BaseModel):
    """A single note with its creation timestamp."""

    id: RecordId
    content: str = Field(..., min_length=1, description="Note text")
    important: bool = False
    date: str = Field(..., description="ISO-8601 creation timestamp")


class ContactFields(BaseModel):
    """Request body for creating or replacing a contact."""

    name: str | None = None
    number: str | None = None


class NoteFields(BaseModel):
    """Request body for creating or replacing a note."""

    content: str | None = None
    important: bool | None = None


@dataclass(frozen=True)
class RecordKind:
    """Field rules shared by every store holding one kind of record.

    ``required`` fields must be present and non-empty on create and replace.
    ``optional`` fields overwrite the stored value only when submitted.
    ``defaults`` fills in creation-only values such as the note date.
    """

    name: str
    collection: str
    model: type[BaseModel]
    required: tuple[str, ...]
    optional: tuple[str, ...] = ()
    defaults: Callable[[], dict[str, Any]] | None = None

    def replacement_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Validate submitted fields and keep only the domain ones."""
        if any(not fields.get(name) for name in self.required):
            raise ValidationFailed(MISSING_CONTENT)
        data = {name: fields[name] for name in self.required}
        data.update(
            {name: fields[name] for name in self.optional if fields.get(name) is not None}
        )
        return data

    def creation_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Validate submitted fields and apply creation defaults."""
        data = self.replacement_fields(fields)
        if self.defaults:
            for name, value in self.defaults().items():
                data.setdefault(name, value)
        return data

    def to_record(self, record_id: RecordId, document: dict[str, Any]) -> BaseModel:
        """Build the public record from its id and stored document."""
        return self.model.model_validate({**document, "id": record_id})


def make_note_kind(random_importance: bool = True) -> RecordKind:
    """Note rules; ``important`` defaults to a coin flip unless disabled."""

    def _defaults() -> dict[str, Any]:
        important = random.random() > 0.5 if random_importance else False
        return {"important": important, "date": timestamp_now()}

    return RecordKind(
        name="note",
        collection="notes",
        model=Note,
        required=("content",),
        optional=("important",),
        defaults=_defaults,
    )


CONTACT = RecordKind(
    name="contact",
    collection="persons",
    model=Contact,
    required=("name", "number"),
)

NOTE = make_note_kind()
