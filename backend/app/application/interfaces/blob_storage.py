"""Abstract interface (port) for uploaded-media blob storage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass
class StoredBlob:
    """Result of writing a single blob."""

    key: str
    url: str
    size: int


@dataclass
class BlobInfo:
    """A blob found while scanning the store."""

    key: str
    modified_at: datetime
    size: int


class BlobStorage(ABC):
    """Port for blob persistence.

    Keys are generated by the store and are collision-resistant, so two
    concurrent writes never target the same name.
    """

    @abstractmethod
    async def store_blob(self, content: bytes, folder: str, extension: str) -> StoredBlob:
        """Write ``content`` under a freshly generated key inside ``folder``."""
        ...

    @abstractmethod
    async def delete_blob(self, key: str) -> bool:
        """Delete a blob. Returns True if removed, False if it did not exist."""
        ...

    @abstractmethod
    def blob_exists(self, key: str) -> bool:
        ...

    @abstractmethod
    def list_blobs(self) -> list[BlobInfo]:
        """Every blob currently in the store."""
        ...
