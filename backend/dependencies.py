"""Store construction and FastAPI dependencies that hand stores to handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from backend.config import Settings
from store.base import RecordStore
from store.database import DocumentDatabase, DocumentRecordStore
from store.memory import SAMPLE_CONTACTS, SAMPLE_NOTES, MemoryRecordStore
from store.models import CONTACT, make_note_kind


@dataclass
class Stores:
    """The record stores served by one application instance."""

    persons: RecordStore
    notes: RecordStore
    database: Optional[DocumentDatabase] = None

    async def open(self) -> None:
        if self.database:
            await self.database.init(
                [self.persons.kind.collection, self.notes.kind.collection]
            )

    async def close(self) -> None:
        if self.database:
            await self.database.close()


def build_stores(settings: Settings) -> Stores:
    """Create the stores selected by ``settings.store_backend``."""
    note_kind = make_note_kind(settings.random_note_importance)

    if settings.store_backend == "database":
        if not settings.database_url:
            raise ValueError("DATABASE_URL must be set when STORE_BACKEND=database")
        database = DocumentDatabase(settings.database_url)
        return Stores(
            persons=DocumentRecordStore(database, CONTACT),
            notes=DocumentRecordStore(database, note_kind),
            database=database,
        )

    seed = settings.seed_sample_data
    return Stores(
        persons=MemoryRecordStore(CONTACT, SAMPLE_CONTACTS if seed else ()),
        notes=MemoryRecordStore(note_kind, SAMPLE_NOTES if seed else ()),
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_person_store(request: Request) -> RecordStore:
    return request.app.state.stores.persons


def get_note_store(request: Request) -> RecordStore:
    return request.app.state.stores.notes
