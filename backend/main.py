"""FastAPI application for the phonebook and notes service.

Endpoints:
  GET    /                  — Landing page
  GET    /info              — Phonebook size and server time (HTML)
  GET    /health            — Store backend and record counts
  GET    /metrics           — Prometheus metrics
  *      /api/persons[/id]  — Contact CRUD (see backend.persons)
  *      /api/notes[/id]    — Note CRUD (see backend.notes)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import Depends, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from backend import notes, persons
from backend.config import Settings, settings
from backend.dependencies import (
    build_stores,
    get_note_store,
    get_person_store,
    get_settings,
)
from backend.errors import register_error_handlers
from backend.middleware import AccessLogMiddleware, MetricsMiddleware
from store.base import RecordStore

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: open the document database when one is configured."""
    stores = app.state.stores
    logger.info("Opening %s record stores...", app.state.settings.store_backend)
    await stores.open()
    yield
    await stores.close()
    logger.info("Record stores closed.")


def create_app(config: Settings | None = None) -> FastAPI:
    """Build an application with its own record stores."""
    config = config or settings

    app = FastAPI(title="Phonebook API", version="1.0.0", lifespan=lifespan)
    app.state.settings = config
    app.state.stores = build_stores(config)

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(persons.router)
    app.include_router(notes.router)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        return (
            "<div><h1>Phonebook</h1>"
            "<p>go to /api/persons for contacts and /api/notes for notes</p></div>"
        )

    @app.get("/info", response_class=HTMLResponse)
    async def info(store: RecordStore = Depends(get_person_store)) -> str:
        """How many contacts are stored, followed by the server time."""
        count = await store.count()
        now = datetime.now().astimezone().strftime("%a %b %d %Y %H:%M:%S GMT%z (%Z)")
        return f"<p>Phonebook has info for {count} people</p>{now}"

    @app.get("/health")
    async def health(
        person_store: RecordStore = Depends(get_person_store),
        note_store: RecordStore = Depends(get_note_store),
        current: Settings = Depends(get_settings),
    ) -> dict[str, Any]:
        return {
            "status": "healthy",
            "store": current.store_backend,
            "persons": await person_store.count(),
            "notes": await note_store.count(),
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @app.get("/metrics")
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
