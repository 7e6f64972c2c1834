"""CRUD contract shared by the in-memory and document-backed record stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from store.models import RecordKind


class RecordStore(ABC):
    """Owns the authoritative collection of one kind of record.

    Identifiers arrive as the raw strings taken from the request path; each
    implementation parses them and raises ``MalformedIdentifier`` when they
    have the wrong shape.
    """

    def __init__(self, kind: RecordKind) -> None:
        self.kind = kind

    @abstractmethod
    async def list_all(self) -> list[BaseModel]:
        """Return every stored record."""

    @abstractmethod
    async def get_by_id(self, record_id: str) -> BaseModel:
        """Return the record under ``record_id`` or raise ``NotFound``."""

    @abstractmethod
    async def create(self, fields: dict[str, Any]) -> BaseModel:
        """Validate, assign a fresh id, store, and return the new record."""

    @abstractmethod
    async def replace(self, record_id: str, fields: dict[str, Any]) -> BaseModel:
        """Overwrite the domain fields of an existing record."""

    @abstractmethod
    async def delete_by_id(self, record_id: str) -> bool:
        """Remove the record. Returns False when nothing was stored under the id."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored records."""
