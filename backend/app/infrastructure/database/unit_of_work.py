"""SQLAlchemy implementation of the UnitOfWork port."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import UnitOfWork
from app.domain.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Commits the request-scoped AsyncSession on behalf of the services."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def commit(self) -> None:
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            logger.error("Commit failed: %s", exc)
            await self._session.rollback()
            raise StorageUnavailableError("Failed to commit changes to the record store") from exc

    async def rollback(self) -> None:
        await self._session.rollback()
