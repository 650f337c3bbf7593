#!/usr/bin/env python
"""Check database connectivity and planning schema.

Usage:
    uv run python scripts/check_db.py
"""

import asyncio
import sys

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine

from app.core.config import get_settings
from app.features.calendar.generator import WEEKS_PER_YEAR

REQUIRED_TABLES = ("store", "sku", "calendar", "planning")


async def check_database() -> int:
    """Verify database connection, tables, and calendar seeding."""
    settings = get_settings()

    print(f"{settings.app_name} - Database Connectivity Check")
    print("=" * 45)
    print(f"Database URL: {settings.database_url.split('@')[-1]}")  # Hide credentials
    print()

    engine = create_async_engine(settings.database_url)

    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            if result.scalar() != 1:
                print("[FAIL] Unexpected result from SELECT 1")
                return 1
            print("[OK] Basic connectivity")

            result = await conn.execute(text("SELECT version()"))
            version = str(result.scalar())
            print(f"[OK] PostgreSQL version: {version[:50]}...")

            result = await conn.execute(
                text(
                    "SELECT table_name FROM information_schema.tables "
                    "WHERE table_schema = 'public'"
                )
            )
            present = {row.table_name for row in result}
            missing = [t for t in REQUIRED_TABLES if t not in present]
            if missing:
                print(f"[FAIL] Missing tables: {', '.join(missing)}")
                print("       Run: uv run alembic upgrade head")
                return 1
            print("[OK] Planning tables present")

            result = await conn.execute(text("SELECT count(*) FROM calendar"))
            weeks = int(result.scalar() or 0)
            if weeks < WEEKS_PER_YEAR:
                print(f"[WARN] Calendar holds {weeks}/{WEEKS_PER_YEAR} weeks")
                print("       Run: uv run python scripts/seed_calendar.py")
            else:
                print(f"[OK] Calendar seeded ({weeks} weeks)")

        print()
        print("Database check completed successfully!")
        return 0

    except SQLAlchemyError as e:
        print(f"[FAIL] Connection failed: {e}")
        print()
        print("Troubleshooting:")
        print("  1. Ensure Docker is running: docker-compose up -d")
        print("  2. Check DATABASE_URL in .env file")
        print("  3. Verify PostgreSQL container is healthy: docker-compose ps")
        return 1

    finally:
        await engine.dispose()


def main() -> None:
    sys.exit(asyncio.run(check_database()))


if __name__ == "__main__":
    main()
