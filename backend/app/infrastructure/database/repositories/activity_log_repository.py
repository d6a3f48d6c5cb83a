"""Concrete repository for activity entries backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import ActivityLogRepository
from app.domain.entities import ActivityAction, ActivityEntry
from app.infrastructure.database.models import ActivityLogModel
from app.infrastructure.database.repositories.errors import translate_store_errors


class SQLAlchemyActivityLogRepository(ActivityLogRepository):
    """Implements the ActivityLogRepository port using SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ActivityLogModel) -> ActivityEntry:
        """Map ORM model → domain entity."""
        return ActivityEntry(
            id=model.id,
            user_id=model.user_id,
            action=ActivityAction(model.action),
            details=model.details or {},
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            created_at=model.created_at,
        )

    def _to_model(self, entity: ActivityEntry) -> ActivityLogModel:
        """Map domain entity → ORM model."""
        return ActivityLogModel(
            user_id=entity.user_id,
            action=entity.action.value,
            details=entity.details,
            ip_address=entity.ip_address,
            user_agent=entity.user_agent,
            created_at=entity.created_at,
        )

    async def create(self, entry: ActivityEntry) -> ActivityEntry:
        model = self._to_model(entry)
        with translate_store_errors("activity append"):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def list_by_user(
        self, user_id: int, *, skip: int = 0, limit: int = 100
    ) -> list[ActivityEntry]:
        stmt = (
            select(ActivityLogModel)
            .where(ActivityLogModel.user_id == user_id)
            .order_by(ActivityLogModel.created_at.desc(), ActivityLogModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        with translate_store_errors("activity listing"):
            result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]
