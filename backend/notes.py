"""Notes endpoints, isomorphic to the phonebook ones under /api/notes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from backend.config import Settings
from backend.dependencies import get_note_store, get_settings
from backend.metrics import RECORD_MUTATIONS
from store.base import RecordStore
from store.errors import NotFound
from store.models import Note, NoteFields

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.get("")
async def list_notes(store: RecordStore = Depends(get_note_store)) -> list[Note]:
    return await store.list_all()


@router.get("/{record_id}")
async def get_note(record_id: str, store: RecordStore = Depends(get_note_store)) -> Note:
    return await store.get_by_id(record_id)


@router.post("")
async def create_note(
    body: NoteFields, store: RecordStore = Depends(get_note_store)
) -> Note:
    """Add a note; ``date`` is set by the server and ``important`` may be defaulted."""
    note = await store.create(body.model_dump())
    RECORD_MUTATIONS.labels(collection="notes", operation="create").inc()
    return note


@router.put("/{record_id}")
async def replace_note(
    record_id: str,
    body: NoteFields,
    store: RecordStore = Depends(get_note_store),
) -> Note:
    note = await store.replace(record_id, body.model_dump())
    RECORD_MUTATIONS.labels(collection="notes", operation="replace").inc()
    return note


@router.delete("/{record_id}", status_code=204)
async def delete_note(
    record_id: str,
    store: RecordStore = Depends(get_note_store),
    settings: Settings = Depends(get_settings),
) -> Response:
    removed = await store.delete_by_id(record_id)
    if not removed and settings.delete_policy == "strict":
        raise NotFound(record_id)
    if removed:
        RECORD_MUTATIONS.labels(collection="notes", operation="delete").inc()
    return Response(status_code=204)
