"""Local filesystem blob storage for normalized media.

Storage layout:
    <upload_dir>/<folder>/<YYYYMMDD_HHmmss>_<uuid hex><ext>

The key of a blob is its path relative to ``upload_dir`` (always with
forward slashes); the public URL is ``<public_base_url>/uploads/<key>``.
"""

import logging
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path

from app.application.interfaces import BlobInfo, BlobStorage, StoredBlob

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"


def _datetime_stamp() -> str:
    """Return a UTC datetime stamp suitable for filenames: YYYYMMDD_HHmmss."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _sanitise(name: str, max_len: int = 80) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "unnamed"


class LocalBlobStorage(BlobStorage):
    """Infrastructure adapter storing blobs as files below one directory."""

    def __init__(self, upload_dir: str, public_base_url: str):
        self._upload_dir = Path(upload_dir)
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        self._public_base_url = public_base_url.rstrip("/")

    # ── Blob Storage ────────────────────────────────────────────────

    async def store_blob(self, content: bytes, folder: str, extension: str) -> StoredBlob:
        """Write ``content`` to ``<upload_dir>/<folder>/``.

        The name combines a UTC datetime stamp with a random UUID so
        concurrent writes within the same second never collide.
        """
        folder_dir = self._upload_dir / _sanitise(folder)
        folder_dir.mkdir(parents=True, exist_ok=True)

        name = f"{_datetime_stamp()}_{uuid.uuid4().hex}{extension}"
        dest_path = folder_dir / name
        dest_path.write_bytes(content)

        key = dest_path.relative_to(self._upload_dir).as_posix()
        logger.info("Stored blob: %s (%d bytes)", key, len(content))

        return StoredBlob(key=key, url=self.url_for(key), size=len(content))

    async def delete_blob(self, key: str) -> bool:
        """Delete a stored blob.

        Returns True if successfully deleted, False if not found. Empty
        folders are *not* pruned.
        """
        file_path = self._resolve(key)
        if file_path is None or not file_path.is_file():
            return False

        file_path.unlink(missing_ok=True)
        logger.info("Deleted blob from disk: %s", key)
        return True

    def blob_exists(self, key: str) -> bool:
        file_path = self._resolve(key)
        return file_path is not None and file_path.is_file()

    def list_blobs(self) -> list[BlobInfo]:
        blobs: list[BlobInfo] = []
        if not self._upload_dir.exists():
            return blobs
        for path in sorted(self._upload_dir.rglob("*")):
            if not path.is_file() or path.name.startswith("."):
                continue
            stat = path.stat()
            blobs.append(
                BlobInfo(
                    key=path.relative_to(self._upload_dir).as_posix(),
                    modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                    size=stat.st_size,
                )
            )
        return blobs

    # ── Utilities ───────────────────────────────────────────────────

    def url_for(self, key: str) -> str:
        return f"{self._public_base_url}{PUBLIC_PREFIX}/{key}"

    def _resolve(self, key: str) -> Path | None:
        """Map a key to a path, refusing anything outside ``upload_dir``."""
        root = self._upload_dir.resolve()
        candidate = (root / key).resolve()
        if candidate == root or root not in candidate.parents:
            logger.warning("Refusing blob key outside storage root: %s", key)
            return None
        return candidate
