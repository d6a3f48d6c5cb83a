"""Abstract repository interface (port) for Website persistence."""

from abc import ABC, abstractmethod

from app.domain.entities import Website


class WebsiteRepository(ABC):
    """Port for website persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, website_id: int) -> Website | None:
        """Retrieve a single website by ID."""
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Website | None:
        """Retrieve a website by its globally unique name."""
        ...

    @abstractmethod
    async def list_by_owner(self, owner_id: int) -> list[Website]:
        """Websites owned by a user, newest first."""
        ...

    @abstractmethod
    async def create(self, website: Website) -> Website:
        """Persist a new website and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, website: Website) -> Website:
        """Update an existing website."""
        ...

    @abstractmethod
    async def delete(self, website_id: int) -> bool:
        """Delete a website together with all of its child rows.

        Returns True if deleted, False if not found. Blobs are *not*
        touched here; the caller removes them after the commit.
        """
        ...
