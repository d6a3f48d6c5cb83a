"""Reclaims blobs that no record references.

Orphans are the expected residue of the blob/record ordering rules: a
crash between committing a record change and deleting the replaced blob,
or two concurrent replacements of the same image. Only blobs older than
the grace period are considered, so uploads still in flight are never
touched.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from app.application.interfaces import (
    BlobStorage,
    CarouselItemRepository,
    MediaItemRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class SweepReport:
    scanned: int = 0
    orphaned: list[str] = field(default_factory=list)
    deleted: int = 0
    errors: list[str] = field(default_factory=list)


class OrphanBlobSweeper:
    def __init__(
        self,
        storage: BlobStorage,
        images: MediaItemRepository,
        carousel_items: CarouselItemRepository,
        grace_period: timedelta,
    ):
        self._storage = storage
        self._images = images
        self._carousel_items = carousel_items
        self._grace_period = grace_period

    async def sweep(self, *, dry_run: bool = True, now: datetime | None = None) -> SweepReport:
        now = now or datetime.now(timezone.utc)
        cutoff = now - self._grace_period
        referenced = await self._images.all_blob_keys() | await self._carousel_items.all_blob_keys()

        report = SweepReport()
        for blob in self._storage.list_blobs():
            report.scanned += 1
            if blob.key in referenced or blob.modified_at > cutoff:
                continue
            report.orphaned.append(blob.key)
            if dry_run:
                continue
            try:
                if await self._storage.delete_blob(blob.key):
                    report.deleted += 1
            except OSError as exc:
                report.errors.append(f"{blob.key}: {exc}")
                logger.warning("Failed to delete orphan blob %s: %s", blob.key, exc)

        logger.info(
            "Orphan sweep%s: scanned=%d orphaned=%d deleted=%d",
            " (dry run)" if dry_run else "",
            report.scanned, len(report.orphaned), report.deleted,
        )
        return report
