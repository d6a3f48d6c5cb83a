#!/usr/bin/env python3
"""
sweep_orphan_blobs.py - delete stored images that no record references

A blob is an orphan when neither an image nor a carousel slide points at
it and it is older than ORPHAN_GRACE_MINUTES (uploads still in flight are
never touched). Orphans are left behind by crashes between a record
commit and the blob delete that follows it.

Usage:
    # default run (dry-run, lists orphans only)
    python scripts/sweep_orphan_blobs.py

    # actually delete
    python scripts/sweep_orphan_blobs.py --execute

    # cron example (daily at 03:00)
    0 3 * * * cd /path/to/backend && python scripts/sweep_orphan_blobs.py --execute >> /var/log/sweep_orphans.log 2>&1
"""

import argparse
import asyncio
import logging

from app.config import get_settings
from app.infrastructure.database.session import (
    dispose_engine,
    get_session_factory,
    init_engine,
)
from app.infrastructure.dependencies import build_orphan_sweeper
from app.infrastructure.logging.log_config import setup_logging

logger = logging.getLogger("sweep_orphan_blobs")


async def run(execute: bool) -> int:
    settings = get_settings()
    init_engine(settings.database_url)
    try:
        async with get_session_factory()() as session:
            report = await build_orphan_sweeper(session).sweep(dry_run=not execute)
    finally:
        await dispose_engine()

    prefix = "" if execute else "[DRY-RUN] "
    for key in report.orphaned:
        logger.info("%s%s %s", prefix, "deleted" if execute else "would delete", key)
    logger.info(
        "%sscanned=%d orphaned=%d deleted=%d errors=%d",
        prefix, report.scanned, len(report.orphaned), report.deleted, len(report.errors),
    )
    for error in report.errors:
        logger.error(error)
    return 1 if report.errors else 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Delete blobs no record references")
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually delete orphans (default: dry-run)",
    )
    args = parser.parse_args()

    setup_logging()
    raise SystemExit(asyncio.run(run(args.execute)))


if __name__ == "__main__":
    main()
