"""Media pipeline — validate, normalize, and stage uploaded images.

The record store and the blob store share no transaction, so every blob
written on behalf of a request is *staged*: if anything fails before the
caller leaves the ``stage()`` block, the blob is deleted again and the
error propagates. A failure can therefore leave at worst an orphaned
blob (reclaimed by the sweeper), never a record pointing at a missing
file.

Commits are never cancelled. When one outlasts the timeout its outcome
is unknown, so the staged blob is kept rather than discarded; if the
commit did not land, the blob is an orphan for the sweeper.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TypeVar

from app.application.interfaces import (
    BlobStorage,
    ImageTransformer,
    TransformConstraints,
    UnitOfWork,
)
from app.domain.exceptions import (
    CommitTimeoutError,
    InputValidationError,
    OperationTimeoutError,
    StorageUnavailableError,
)
from app.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("MediaPipeline")

T = TypeVar("T")


@dataclass
class IncomingFile:
    """A file received from the client, before any processing."""

    filename: str
    content_type: str | None
    content: bytes


@dataclass
class StagedMedia:
    """A normalized image that has been written to the blob store."""

    key: str
    url: str
    width: int
    height: int
    file_size: int
    mime_type: str
    original_filename: str


class MediaPipeline:
    """Validate → transform → write, with cleanup of staged blobs on failure."""

    def __init__(
        self,
        storage: BlobStorage,
        transformer: ImageTransformer,
        constraints: TransformConstraints,
        *,
        allowed_mime_types: list[str],
        max_upload_bytes: int,
        timeout: float,
    ):
        self._storage = storage
        self._transformer = transformer
        self._constraints = constraints
        self._allowed_mime_types = allowed_mime_types
        self._max_upload_bytes = max_upload_bytes
        self._timeout = timeout

    # ── Validation ───────────────────────────────────────────────────

    def validate(self, upload: IncomingFile | None, *, required: bool) -> IncomingFile | None:
        """Check an upload before any store is touched.

        Returns the upload, or None when no (non-empty) file was sent and
        none is required.
        """
        if upload is None or not upload.content:
            if required:
                raise InputValidationError("Image file is required")
            return None

        if upload.content_type not in self._allowed_mime_types:
            raise InputValidationError(
                f"Unsupported file type: {upload.content_type or 'unknown'}",
                details={"allowed_types": self._allowed_mime_types},
            )

        if len(upload.content) > self._max_upload_bytes:
            max_mb = self._max_upload_bytes / (1024 * 1024)
            raise InputValidationError(
                f"File too large. Maximum size is {max_mb:g}MB.",
                details={"size_bytes": len(upload.content), "max_bytes": self._max_upload_bytes},
            )
        return upload

    # ── Staging ──────────────────────────────────────────────────────

    @asynccontextmanager
    async def stage(self, upload: IncomingFile, folder: str) -> AsyncIterator[StagedMedia]:
        """Normalize and store ``upload``; delete it again if the block fails.

        Usage:
            async with pipeline.stage(upload, "images") as media:
                item = await repo.create(...)
                await pipeline.bounded_commit(unit_of_work, "save image")

        A commit timeout or a cancelled request leaves the blob in place,
        since a record referencing it may still be committed.
        """
        staged = await self._normalize_and_store(upload, folder)
        try:
            yield staged
        except (CommitTimeoutError, asyncio.CancelledError) as exc:
            plog.step_error(
                PipelineStage.CLEANUP, f"Keeping staged blob {staged.key}; commit outcome unknown",
                error=exc,
            )
            raise
        except BaseException as exc:
            plog.step_error(PipelineStage.CLEANUP, f"Discarding staged blob {staged.key}", error=exc)
            await self.discard(staged.key)
            raise

    async def discard(self, key: str) -> None:
        """Delete a blob that is no longer referenced.

        A failed delete leaves an orphan for the sweeper; the record store
        is already consistent at this point, so the error is only logged.
        """
        try:
            removed = await self._storage.delete_blob(key)
        except OSError:
            logger.warning("Could not delete blob %s; leaving it for the orphan sweep", key, exc_info=True)
            return
        if removed:
            plog.detail("Removed blob", key=key)
        else:
            logger.debug("Blob %s was already gone", key)

    async def bounded(self, awaitable: Awaitable[T], operation: str) -> T:
        """Await ``awaitable`` within the operation timeout."""
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            logger.error("%s exceeded %.1fs", operation, self._timeout)
            raise OperationTimeoutError(operation, self._timeout) from exc

    async def bounded_commit(self, unit_of_work: UnitOfWork, operation: str) -> None:
        """Commit within the operation timeout without cancelling the commit.

        The commit runs shielded. On timeout it keeps running and may
        still succeed, which is why CommitTimeoutError tells ``stage()``
        to keep the staged blob.
        """
        commit = asyncio.ensure_future(unit_of_work.commit())
        try:
            await asyncio.wait_for(asyncio.shield(commit), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            logger.error("%s commit exceeded %.1fs; letting it finish", operation, self._timeout)
            commit.add_done_callback(lambda task: _log_late_commit(task, operation))
            raise CommitTimeoutError(operation, self._timeout) from exc

    # ── Internal ─────────────────────────────────────────────────────

    async def _normalize_and_store(self, upload: IncomingFile, folder: str) -> StagedMedia:
        plog.step_start(
            PipelineStage.UPLOAD, f"Received '{upload.filename}'",
            size_bytes=len(upload.content), content_type=upload.content_type,
        )

        with plog.timed_step(PipelineStage.TRANSFORM, f"Normalizing '{upload.filename}'"):
            transformed = await self.bounded(
                self._transformer.transform(upload.content, self._constraints),
                "image transform",
            )

        try:
            stored = await self._storage.store_blob(transformed.content, folder, transformed.extension)
        except OSError as exc:
            plog.step_error(PipelineStage.STORAGE, f"Failed to write '{upload.filename}'", error=exc)
            raise StorageUnavailableError("Failed to write image to blob storage") from exc

        plog.step_complete(
            PipelineStage.STORAGE, f"Stored '{upload.filename}'",
            key=stored.key, width=transformed.width, height=transformed.height,
        )
        return StagedMedia(
            key=stored.key,
            url=stored.url,
            width=transformed.width,
            height=transformed.height,
            file_size=stored.size,
            mime_type=transformed.mime_type,
            original_filename=upload.filename,
        )


def _log_late_commit(task: asyncio.Future, operation: str) -> None:
    if task.cancelled():
        logger.warning("%s commit was cancelled after timing out", operation)
    elif task.exception() is not None:
        logger.warning("%s commit failed after timing out: %s", operation, task.exception())
    else:
        logger.info("%s commit completed after timing out", operation)
