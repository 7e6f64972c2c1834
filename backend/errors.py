"""Map store failures and unmatched routes to uniform JSON error bodies."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from store.errors import MalformedIdentifier, NotFound, ValidationFailed

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def malformed_id_handler(request: Request, exc: MalformedIdentifier) -> JSONResponse:
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return _error(400, "malformatted id")


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return _error(400, str(exc))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body that FastAPI could not parse into the request model."""
    message = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )
    logger.warning("%s %s: %s", request.method, request.url.path, message)
    return _error(400, message)


async def not_found_handler(request: Request, exc: NotFound) -> Response:
    return Response(status_code=404)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    # Wrong method on a known path counts as an unknown endpoint too.
    if exc.status_code in (404, 405):
        return _error(404, "unknown endpoint")
    return _error(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Install every handler on ``app``."""
    app.add_exception_handler(MalformedIdentifier, malformed_id_handler)
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
