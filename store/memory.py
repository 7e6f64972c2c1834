"""Process-local record store backed by an ordered list."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import BaseModel

from store.base import RecordStore
from store.errors import MalformedIdentifier, NotFound
from store.models import RecordKind

logger = logging.getLogger(__name__)

SAMPLE_CONTACTS: list[dict[str, Any]] = [
    {"id": 1, "name": "Arto Hellas", "number": "040-123456"},
    {"id": 2, "name": "Ada Lovelace", "number": "39-44-5323523"},
    {"id": 3, "name": "Dan Abramov", "number": "12-43-234345"},
    {"id": 4, "name": "Mary Poppendieck", "number": "39-23-6423122"},
]

SAMPLE_NOTES: list[dict[str, Any]] = [
    {
        "id": 1,
        "content": "HTML is easy",
        "date": "2019-05-30T17:30:31.098Z",
        "important": True,
    },
    {
        "id": 2,
        "content": "Browser can execute only Javascript",
        "date": "2019-05-30T18:39:34.091Z",
        "important": True,
    },
    {
        "id": 3,
        "content": "GET and POST are the most important methods of HTTP protocol",
        "date": "2019-05-30T19:20:14.298Z",
        "important": True,
    },
]


class MemoryRecordStore(RecordStore):
    """Keeps records in insertion order for the lifetime of the process.

    Identifiers are integers: one more than the largest id the store has held.
    The id is computed and then inserted in two steps with no lock, so two
    creates that compute ``next_id`` before either inserts would collide.
    Requests are served from a single event loop and ``create`` never awaits
    in between, so this only matters if the store is shared across threads.
    """

    def __init__(self, kind: RecordKind, seed: Iterable[dict[str, Any]] = ()) -> None:
        super().__init__(kind)
        self._records: list[BaseModel] = [
            kind.to_record(item["id"], item) for item in seed
        ]
        self._last_id = max((r.id for r in self._records), default=0)

    @staticmethod
    def _parse_id(record_id: str | int) -> int:
        # ASCII digits only: no sign, padding or other scripts.
        text = str(record_id)
        if not (text.isascii() and text.isdigit()):
            raise MalformedIdentifier(record_id)
        return int(text)

    def _index_of(self, record_id: int) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def next_id(self) -> int:
        """Identifier the next create will assign.

        Ids freed by deletion are never handed out again, so the count
        continues from the highest id ever issued.
        """
        highest = max((r.id for r in self._records), default=0)
        return max(highest, self._last_id) + 1

    async def list_all(self) -> list[BaseModel]:
        return list(self._records)

    async def get_by_id(self, record_id: str | int) -> BaseModel:
        index = self._index_of(self._parse_id(record_id))
        if index is None:
            raise NotFound(record_id)
        return self._records[index]

    async def create(self, fields: dict[str, Any]) -> BaseModel:
        data = self.kind.creation_fields(fields)
        record = self.kind.to_record(self.next_id(), data)
        self._records.append(record)
        self._last_id = record.id
        logger.info("Created %s %s", self.kind.name, record.id)
        return record

    async def replace(self, record_id: str | int, fields: dict[str, Any]) -> BaseModel:
        parsed = self._parse_id(record_id)
        data = self.kind.replacement_fields(fields)
        index = self._index_of(parsed)
        if index is None:
            raise NotFound(record_id)
        current = self._records[index]
        updated = self.kind.to_record(parsed, {**current.model_dump(), **data})
        self._records[index] = updated
        logger.info("Replaced %s %s", self.kind.name, parsed)
        return updated

    async def delete_by_id(self, record_id: str | int) -> bool:
        parsed = self._parse_id(record_id)
        remaining = [r for r in self._records if r.id != parsed]
        removed = len(remaining) != len(self._records)
        self._records = remaining
        if removed:
            logger.info("Deleted %s %s", self.kind.name, parsed)
        return removed

    async def count(self) -> int:
        return len(self._records)
