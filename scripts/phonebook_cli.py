#!/usr/bin/env python3
"""Add a contact to, or list, the phonebook stored in PostgreSQL.

The connection string is read from DATABASE_URL (or .env), never from the
command line.

Usage:
    python scripts/phonebook_cli.py                   # list the phonebook
    python scripts/phonebook_cli.py "Ada Lovelace" 39-44-5323523
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from backend.config import settings  # noqa: E402
from store.database import DocumentDatabase, DocumentRecordStore  # noqa: E402
from store.errors import ValidationFailed  # noqa: E402
from store.models import CONTACT  # noqa: E402


async def run(name: str | None, number: str | None) -> int:
    database = DocumentDatabase(settings.database_url)
    await database.init([CONTACT.collection])
    store = DocumentRecordStore(database, CONTACT)
    try:
        if name is None:
            print("phonebook:")
            for contact in await store.list_all():
                print(f"{contact.name} {contact.number}")
            return 0
        try:
            contact = await store.create({"name": name, "number": number})
        except ValidationFailed as e:
            print(f"Cannot add contact: {e}")
            return 1
        print(f"Added {contact.name} number {contact.number} to phonebook")
        return 0
    finally:
        await database.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Add or list phonebook contacts.")
    parser.add_argument("name", nargs="?", help="Contact name (omit to list)")
    parser.add_argument("number", nargs="?", help="Phone number")
    args = parser.parse_args()

    if not settings.database_url:
        print("DATABASE_URL is not set")
        return 1
    if args.name is not None and args.number is None:
        parser.error("a number is required when adding a contact")
    return asyncio.run(run(args.name, args.number))


if __name__ == "__main__":
    sys.exit(main())
