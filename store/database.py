"""PostgreSQL document store for contacts and notes.

Each collection is a table of JSONB documents keyed by a UUID that is
generated on insert and exposed to clients as a string. Uses SQLAlchemy's
async engine with the asyncpg driver.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Iterable, Optional

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from store.base import RecordStore
from store.errors import MalformedIdentifier, NotFound
from store.models import RecordKind

logger = logging.getLogger(__name__)

_CREATE_COLLECTION_STMTS = [
    """CREATE TABLE IF NOT EXISTS {table} (
        id UUID PRIMARY KEY,
        document JSONB NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )""",
    "CREATE INDEX IF NOT EXISTS idx_{table}_created ON {table}(created_at)",
]


def _parse_uuid(record_id: str) -> uuid.UUID:
    """Parse a path identifier, rejecting anything that is not a UUID."""
    try:
        return uuid.UUID(str(record_id))
    except (ValueError, AttributeError):
        raise MalformedIdentifier(record_id) from None


class DocumentDatabase:
    """Owns the async engine shared by every collection store."""

    def __init__(self, database_url: str) -> None:
        self._url = database_url
        self._engine: Optional[AsyncEngine] = None

    @property
    def available(self) -> bool:
        """Whether the engine has been created."""
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("DocumentDatabase.init() has not been awaited")
        return self._engine

    async def init(self, collections: Iterable[str]) -> None:
        """Create the engine, connection pool, and one table per collection."""
        try:
            self._engine = create_async_engine(self._url, pool_size=5, max_overflow=10)
            async with self._engine.begin() as conn:
                for table in collections:
                    for stmt in _CREATE_COLLECTION_STMTS:
                        await conn.execute(text(stmt.format(table=table)))
            logger.info("PostgreSQL connected - collections ready")
        except Exception as e:
            logger.error("PostgreSQL unavailable: %s", e)
            self._engine = None
            raise

    async def close(self) -> None:
        """Dispose of the engine and connection pool."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None


class DocumentRecordStore(RecordStore):
    """Record store over one document table of a ``DocumentDatabase``."""

    def __init__(self, database: DocumentDatabase, kind: RecordKind) -> None:
        super().__init__(kind)
        self._db = database
        self._table = kind.collection

    def _record(self, row: Any) -> BaseModel:
        return self.kind.to_record(str(row[0]), dict(row[1]))

    async def list_all(self) -> list[BaseModel]:
        async with self._db.engine.connect() as conn:
            result = await conn.execute(
                text(f"SELECT id, document FROM {self._table} ORDER BY created_at")
            )
            return [self._record(row) for row in result.fetchall()]

    async def get_by_id(self, record_id: str) -> BaseModel:
        rid = _parse_uuid(record_id)
        async with self._db.engine.connect() as conn:
            result = await conn.execute(
                text(f"SELECT id, document FROM {self._table} WHERE id = :id"),
                {"id": rid},
            )
            row = result.fetchone()
        if row is None:
            raise NotFound(record_id)
        return self._record(row)

    async def create(self, fields: dict[str, Any]) -> BaseModel:
        data = self.kind.creation_fields(fields)
        rid = uuid.uuid4()
        async with self._db.engine.begin() as conn:
            await conn.execute(
                text(
                    f"INSERT INTO {self._table} (id, document, created_at) "
                    "VALUES (:id, :document, NOW())"
                ),
                {"id": rid, "document": json.dumps(data)},
            )
        logger.info("Created %s %s", self.kind.name, rid)
        return self.kind.to_record(str(rid), data)

    async def replace(self, record_id: str, fields: dict[str, Any]) -> BaseModel:
        rid = _parse_uuid(record_id)
        data = self.kind.replacement_fields(fields)
        async with self._db.engine.begin() as conn:
            result = await conn.execute(
                text(
                    f"UPDATE {self._table} "
                    "SET document = document || CAST(:patch AS JSONB) "
                    "WHERE id = :id RETURNING id, document"
                ),
                {"id": rid, "patch": json.dumps(data)},
            )
            row = result.fetchone()
        if row is None:
            raise NotFound(record_id)
        logger.info("Replaced %s %s", self.kind.name, rid)
        return self._record(row)

    async def delete_by_id(self, record_id: str) -> bool:
        rid = _parse_uuid(record_id)
        async with self._db.engine.begin() as conn:
            result = await conn.execute(
                text(f"DELETE FROM {self._table} WHERE id = :id RETURNING id"),
                {"id": rid},
            )
            removed = result.fetchone() is not None
        if removed:
            logger.info("Deleted %s %s", self.kind.name, rid)
        return removed

    async def count(self) -> int:
        async with self._db.engine.connect() as conn:
            result = await conn.execute(text(f"SELECT COUNT(*) FROM {self._table}"))
            return result.scalar_one()
