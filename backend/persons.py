"""Phonebook endpoints.

  GET    /api/persons       — all contacts
  GET    /api/persons/{id}  — one contact
  POST   /api/persons       — create a contact
  PUT    /api/persons/{id}  — replace name and number
  DELETE /api/persons/{id}  — remove a contact
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.config import Settings
from backend.dependencies import get_person_store, get_settings
from backend.metrics import RECORD_MUTATIONS
from store.base import RecordStore
from store.errors import NotFound
from store.models import Contact, ContactFields

router = APIRouter(prefix="/api/persons", tags=["persons"])


@router.get("")
async def list_persons(store: RecordStore = Depends(get_person_store)) -> list[Contact]:
    """Return the whole phonebook."""
    return await store.list_all()


@router.get("/{record_id}")
async def get_person(
    record_id: str, store: RecordStore = Depends(get_person_store)
) -> Contact:
    """Return one contact; 404 with an empty body when absent."""
    return await store.get_by_id(record_id)


@router.post("")
async def create_person(
    body: ContactFields, store: RecordStore = Depends(get_person_store)
) -> Contact:
    """Add a contact. Both name and number are required."""
    contact = await store.create(body.model_dump())
    RECORD_MUTATIONS.labels(collection="persons", operation="create").inc()
    return contact


@router.put("/{record_id}")
async def replace_person(
    record_id: str,
    body: ContactFields,
    store: RecordStore = Depends(get_person_store),
) -> Contact:
    """Overwrite the name and number of an existing contact."""
    contact = await store.replace(record_id, body.model_dump())
    RECORD_MUTATIONS.labels(collection="persons", operation="replace").inc()
    return contact


@router.delete("/{record_id}", status_code=202)
async def delete_person(
    record_id: str,
    store: RecordStore = Depends(get_person_store),
    settings: Settings = Depends(get_settings),
) -> dict[str, str]:
    """Remove a contact. Absent ids succeed unless the policy is strict."""
    removed = await store.delete_by_id(record_id)
    if not removed and settings.delete_policy == "strict":
        raise NotFound(record_id)
    if removed:
        RECORD_MUTATIONS.labels(collection="persons", operation="delete").inc()
    return {"message": "deleted contact"}
