#!/usr/bin/env python3
"""
Seed the lesson catalog of the Lesson Booking SQLite database.

Lessons are read from a JSON array (see ``lesson_booking_api/seed/lessons.json``)
and inserted only when the catalog is empty, unless ``--force`` is given,
in which case lessons whose id is not yet present are added.

Usage:
    python seed_lessons.py --db ./lesson_booking_api/lesson_booking.db --file ./lesson_booking_api/seed/lessons.json
"""

import argparse
import asyncio
import sys

from lesson_booking_api.app.core.config import settings
from lesson_booking_api.app.core.db import Database
from lesson_booking_api.app.core.errors import StoreUnavailableError
from lesson_booking_api.app.core.logging_config import setup_logging
from lesson_booking_api.app.services.catalog_service import CatalogService
from lesson_booking_api.app.stores.sqlite_store import SQLiteCatalogStore


async def seed(db_path: str, seed_file: str, force: bool) -> int:
    store = SQLiteCatalogStore(Database(db_path))
    await store.open()
    try:
        catalog = CatalogService(store)
        return await catalog.seed_lessons(catalog.load_seed_file(seed_file), only_if_empty=not force)
    finally:
        await store.close()


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Seed the lesson catalog (SQLite).")
    ap.add_argument("--db", default=settings.database_url, help="Path to SQLite DB file")
    ap.add_argument("--file", default=settings.seed_file, help="JSON array of lessons")
    ap.add_argument("--force", action="store_true", help="Add missing lessons even if the catalog is not empty")
    args = ap.parse_args(argv)

    setup_logging(settings.log_level)
    try:
        inserted = asyncio.run(seed(args.db, args.file, args.force))
    except FileNotFoundError:
        print(f"[!] Seed file not found: {args.file}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"[!] Seed error: {e}", file=sys.stderr)
        return 1
    except StoreUnavailableError as e:
        print(f"[!] Database error: {e.message}", file=sys.stderr)
        return 2

    print(f"[+] Seeded {inserted} lesson(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
