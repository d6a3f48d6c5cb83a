"""Domain entity — an uploaded image attached to a website."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class MediaItem:
    """A normalized image stored in the blob store.

    ``blob_key`` addresses the file inside the blob store; ``url`` is the
    public link handed out to clients. Both change together when the
    underlying file is replaced.
    """

    website_id: int
    blob_key: str
    url: str
    width: int
    height: int
    original_filename: str
    file_size: int
    mime_type: str
    alt_text: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def replace_blob(
        self, blob_key: str, url: str, width: int, height: int,
        original_filename: str, file_size: int, mime_type: str,
    ) -> None:
        self.blob_key = blob_key
        self.url = url
        self.width = width
        self.height = height
        self.original_filename = original_filename
        self.file_size = file_size
        self.mime_type = mime_type

    def update(self, alt_text: str | None = None) -> None:
        if alt_text is not None:
            self.alt_text = alt_text
