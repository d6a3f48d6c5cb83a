"""Abstract repository interface (port) for MediaItem persistence."""

from abc import ABC, abstractmethod

from app.domain.entities import MediaItem


class MediaItemRepository(ABC):
    """Port for image persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, item_id: int) -> MediaItem | None:
        ...

    @abstractmethod
    async def list_by_website(self, website_id: int) -> list[MediaItem]:
        """Images of one website, newest first."""
        ...

    @abstractmethod
    async def list_by_owner(self, owner_id: int) -> list[MediaItem]:
        """Images across every website owned by ``owner_id``, newest first."""
        ...

    @abstractmethod
    async def count_by_website(self, website_id: int) -> int:
        ...

    @abstractmethod
    async def create(self, item: MediaItem) -> MediaItem:
        ...

    @abstractmethod
    async def update(self, item: MediaItem) -> MediaItem:
        ...

    @abstractmethod
    async def delete(self, item_id: int) -> bool:
        """Delete an image record. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def all_blob_keys(self) -> set[str]:
        """Every blob key currently referenced by an image record."""
        ...
