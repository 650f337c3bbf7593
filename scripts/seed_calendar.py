#!/usr/bin/env python
"""Seed the 52-week retail planning calendar.

Usage:
    # Insert missing weeks
    uv run python scripts/seed_calendar.py

    # Print the generated calendar without writing
    uv run python scripts/seed_calendar.py --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.core.database import get_engine, get_session_maker
from app.core.logging import configure_logging, get_logger
from app.features.calendar.generator import generate_retail_calendar
from app.features.calendar.service import CalendarService

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the retail planning calendar.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated calendar instead of writing it",
    )
    return parser.parse_args(argv)


def print_calendar() -> None:
    for week in generate_retail_calendar():
        print(
            f"{week.seq_no:>3}  {week.week}  {week.week_label:<8}  "
            f"{week.month}  {week.month_label}"
        )


async def seed() -> int:
    """Insert missing calendar weeks and report the counts."""
    service = CalendarService()
    session_maker = get_session_maker()

    try:
        async with session_maker() as session:
            result = await service.seed_calendar(session)
            await session.commit()
    except SQLAlchemyError as e:
        logger.error("calendar.seed_script_failed", error=str(e), error_type=type(e).__name__)
        print(f"[FAIL] Calendar seed failed: {e}")
        return 1
    finally:
        await get_engine().dispose()

    print(f"[OK] Inserted {result.inserted_count} weeks ({result.existing_count} already present)")
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging()

    if args.dry_run:
        print_calendar()
        sys.exit(0)

    sys.exit(asyncio.run(seed()))


if __name__ == "__main__":
    main()
