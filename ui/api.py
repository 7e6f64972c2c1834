"""Thin HTTP client for the phonebook backend.

All functions return parsed JSON (dicts/lists) or raise on failure.
``resource`` is the collection name: ``"persons"`` or ``"notes"``.
Uses requests (synchronous) since Streamlit reruns are synchronous.
"""

from __future__ import annotations

import os
from typing import Any

import requests

BASE_URL = os.getenv("PHONEBOOK_API_URL", "http://localhost:3001")
_TIMEOUT = 10  # seconds


def _url(resource: str, record_id: Any = None) -> str:
    base = f"{BASE_URL}/api/{resource}"
    return base if record_id is None else f"{base}/{record_id}"


def get_all(resource: str) -> list[dict[str, Any]]:
    """GET /api/<resource> — the full collection."""
    resp = requests.get(_url(resource), timeout=_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def create(resource: str, fields: dict[str, Any]) -> dict[str, Any]:
    """POST /api/<resource> — create a record, returns it with its new id."""
    resp = requests.post(_url(resource), json=fields, timeout=_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def update(resource: str, record_id: Any, fields: dict[str, Any]) -> dict[str, Any]:
    """PUT /api/<resource>/<id> — replace a record's fields."""
    resp = requests.put(_url(resource, record_id), json=fields, timeout=_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def delete(resource: str, record_id: Any) -> None:
    """DELETE /api/<resource>/<id>."""
    resp = requests.delete(_url(resource, record_id), timeout=_TIMEOUT)
    resp.raise_for_status()


def get_info() -> str:
    """GET /info — HTML fragment with the phonebook size."""
    resp = requests.get(f"{BASE_URL}/info", timeout=_TIMEOUT)
    resp.raise_for_status()
    return resp.text


def error_message(exc: requests.HTTPError) -> str:
    """The ``error`` field of a failed response, or the HTTP reason."""
    response = exc.response
    if response is None:
        return str(exc)
    try:
        return response.json()["error"]
    except (ValueError, KeyError, TypeError):
        return f"{response.status_code} {response.reason}"
