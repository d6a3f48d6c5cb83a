"""Abstract repository interface for the append-only activity log."""

from abc import ABC, abstractmethod

from app.domain.entities import ActivityEntry


class ActivityLogRepository(ABC):
    """Port — defines persistence operations for activity entries."""

    @abstractmethod
    async def create(self, entry: ActivityEntry) -> ActivityEntry:
        """Persist a new activity entry.

        Returns:
            The created entry with its assigned ID.
        """
        ...

    @abstractmethod
    async def list_by_user(
        self, user_id: int, *, skip: int = 0, limit: int = 100
    ) -> list[ActivityEntry]:
        """Retrieve a user's entries, ordered by most recent first."""
        ...
