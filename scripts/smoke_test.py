#!/usr/bin/env python3
"""Local smoke test runner.

Starts the phonebook API on an empty in-memory store, replays the CRUD
scenarios over HTTP, and reports results.

Usage:
    python scripts/smoke_test.py [--port 3101]
"""

import argparse
import atexit
import os
import signal
import subprocess
import sys
import time
from typing import Callable

import httpx

STARTUP_TIMEOUT = 30  # seconds to wait for the API

_processes: list[subprocess.Popen] = []


def _cleanup() -> None:
    """Stop the API process."""
    for proc in _processes:
        try:
            proc.terminate()
            proc.wait(timeout=5)
        except (OSError, subprocess.TimeoutExpired):
            proc.kill()
    print("\n--- API process cleaned up ---")


atexit.register(_cleanup)
signal.signal(signal.SIGINT, lambda *_: sys.exit(1))
signal.signal(signal.SIGTERM, lambda *_: sys.exit(1))


def start_api(port: int) -> subprocess.Popen:
    """Run ``backend.main`` on ``port`` with empty in-memory stores."""
    env = {
        **os.environ,
        "PORT": str(port),
        "STORE_BACKEND": "memory",
        "SEED_SAMPLE_DATA": "false",
    }
    proc = subprocess.Popen(
        [sys.executable, "-m", "backend.main"],
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    )
    _processes.append(proc)
    print(f"  Started API (PID {proc.pid})")
    return proc


def wait_for_api(base_url: str, timeout: int = STARTUP_TIMEOUT) -> bool:
    """Poll /health until the API answers or timeout is reached."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with httpx.Client(timeout=5) as client:
                if client.get(f"{base_url}/health").status_code == 200:
                    print("  API is ready")
                    return True
        except (httpx.ConnectError, httpx.ReadTimeout):
            pass
        time.sleep(0.5)
    print(f"  TIMEOUT: API did not start in {timeout}s")
    return False


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


def create_contact(client: httpx.Client) -> bool:
    resp = client.post(
        "/api/persons", json={"name": "Ada Lovelace", "number": "39-44-5323523"}
    )
    body = resp.json()
    return (
        resp.status_code == 200
        and body["name"] == "Ada Lovelace"
        and body["number"] == "39-44-5323523"
        and "id" in body
    )


def reject_missing_number(client: httpx.Client) -> bool:
    before = len(client.get("/api/persons").json())
    resp = client.post("/api/persons", json={"name": "Ada"})
    after = len(client.get("/api/persons").json())
    return (
        resp.status_code == 400
        and resp.json() == {"error": "content missing"}
        and before == after
    )


def missing_id_is_404(client: httpx.Client) -> bool:
    resp = client.get("/api/persons/9999")
    return resp.status_code == 404 and resp.content == b""


def delete_then_get(client: httpx.Client) -> bool:
    created = client.post(
        "/api/persons", json={"name": "Dan Abramov", "number": "12-43-234345"}
    ).json()
    deleted = client.delete(f"/api/persons/{created['id']}")
    fetched = client.get(f"/api/persons/{created['id']}")
    return deleted.status_code == 202 and fetched.status_code == 404


def unknown_endpoint(client: httpx.Client) -> bool:
    resp = client.get("/api/nothing-here")
    return resp.status_code == 404 and resp.json() == {"error": "unknown endpoint"}


SCENARIOS: list[tuple[str, Callable[[httpx.Client], bool]]] = [
    ("Create a contact on an empty store", create_contact),
    ("Reject a contact without a number", reject_missing_number),
    ("GET a missing id returns 404", missing_id_is_404),
    ("DELETE then GET returns 404", delete_then_get),
    ("Unmatched route returns unknown endpoint", unknown_endpoint),
]


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--port", type=int, default=3101)
    args = parser.parse_args()
    base_url = f"http://localhost:{args.port}"

    print("=" * 60)
    print("Phonebook API - Smoke Tests")
    print("=" * 60)

    print("\n--- Starting API ---")
    start_api(args.port)
    if not wait_for_api(base_url):
        print("FATAL: API failed to start. Aborting.")
        return 1

    results: list[bool] = []
    with httpx.Client(base_url=base_url, timeout=10) as client:
        for name, scenario in SCENARIOS:
            try:
                passed = scenario(client)
            except Exception as e:
                print(f"ERROR in '{name}': {e}")
                passed = False
            print(f"  {'PASS' if passed else 'FAIL'}  {name}")
            results.append(passed)

    print(f"\n{'='*60}")
    print(f"SUMMARY: {sum(results)}/{len(results)} scenarios passed")
    print(f"{'='*60}")
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
