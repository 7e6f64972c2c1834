"""Per-request access logging and Prometheus instrumentation."""

from __future__ import annotations

import json
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from backend.metrics import HTTP_DURATION, HTTP_REQUESTS

access_logger = logging.getLogger("backend.access")

# Endpoints excluded from HTTP metrics to avoid cardinality explosion
_METRICS_EXCLUDE = {"/metrics", "/openapi.json", "/docs", "/redoc"}


def _body_for_log(raw: bytes) -> str:
    """Compact JSON rendering of a request body, ``{}`` when empty."""
    if not raw:
        return "{}"
    try:
        return json.dumps(json.loads(raw), separators=(",", ":"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return raw.decode("utf-8", errors="replace")[:200]


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log ``METHOD path status size - latency ms body`` for every request."""

    async def dispatch(self, request: Request, call_next):
        body = await request.body()
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The 500 body is rendered further out, by ServerErrorMiddleware.
            self._log(request, 500, "-", start, body)
            raise

        self._log(
            request,
            response.status_code,
            response.headers.get("content-length", "-"),
            start,
            body,
        )
        return response

    @staticmethod
    def _log(request: Request, status: int, size: str, start: float, body: bytes) -> None:
        access_logger.info(
            "%s %s %s %s - %.3f ms %s",
            request.method,
            request.url.path,
            status,
            size,
            (time.perf_counter() - start) * 1000,
            _body_for_log(body),
        )


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request count and duration for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        """Wrap each request with timing and counting."""
        path = request.url.path
        if path in _METRICS_EXCLUDE:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        # Label by route template so record ids do not become label values.
        route = request.scope.get("route")
        endpoint = getattr(route, "path", "unmatched")
        HTTP_REQUESTS.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()
        HTTP_DURATION.labels(endpoint=endpoint).observe(elapsed)
        return response
