"""Abstract transaction boundary for the record store."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Commits or discards the pending record-store changes of one request.

    Services commit explicitly at the points where blob lifecycle depends
    on the record being durable (e.g. before deleting a replaced blob).
    """

    @abstractmethod
    async def commit(self) -> None:
        """Make pending changes durable. Raises StorageUnavailableError on failure."""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...
