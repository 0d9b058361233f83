#!/usr/bin/env python3
"""
Check that the Lesson Booking database can be opened and queried.

Prints the database path, pings it and reports how many lessons and
orders it holds.  Exits non-zero when the connection fails.

Usage:
    python diagnose.py --db ./lesson_booking_api/lesson_booking.db
"""

import argparse
import asyncio
import sys

from lesson_booking_api.app.core.config import settings
from lesson_booking_api.app.core.db import Database, resolve_database_path
from lesson_booking_api.app.core.errors import StoreUnavailableError
from lesson_booking_api.app.stores.sqlite_store import SQLiteCatalogStore


async def diagnose(db_path: str) -> tuple[int, int]:
    store = SQLiteCatalogStore(Database(db_path))
    await store.open()
    try:
        await store.ping()
        return await store.count_lessons(), len(await store.list_orders())
    finally:
        await store.close()


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Check the Lesson Booking database connection.")
    ap.add_argument("--db", default=settings.database_url, help="Path to SQLite DB file")
    args = ap.parse_args(argv)

    print(f"DATABASE_URL: {resolve_database_path(args.db)}")
    try:
        lessons, orders = asyncio.run(diagnose(args.db))
    except StoreUnavailableError as e:
        print(f"[!] Database connection failed: {e.message}", file=sys.stderr)
        return 1
    print(f"[+] Database connection successful ({lessons} lesson(s), {orders} order(s))")
    return 0


if __name__ == "__main__":
    sys.exit(main())
