"""Concrete repository implementation for Website backed by SQLAlchemy."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import WebsiteRepository
from app.domain.entities import Website
from app.domain.exceptions import DuplicateEntityError
from app.infrastructure.database.models import (
    CarouselItemModel,
    MediaItemModel,
    WebsiteModel,
)
from app.infrastructure.database.repositories.errors import translate_store_errors


class SQLAlchemyWebsiteRepository(WebsiteRepository):
    """Implements the WebsiteRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: WebsiteModel) -> Website:
        """Map ORM model → domain entity."""
        return Website(
            id=model.id,
            name=model.name,
            about=model.about,
            owner_id=model.owner_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, website_id: int) -> Website | None:
        with translate_store_errors("website lookup"):
            model = await self._session.get(WebsiteModel, website_id)
        return self._to_entity(model) if model else None

    async def get_by_name(self, name: str) -> Website | None:
        with translate_store_errors("website lookup"):
            result = await self._session.execute(
                select(WebsiteModel).where(WebsiteModel.name == name)
            )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_by_owner(self, owner_id: int) -> list[Website]:
        with translate_store_errors("website listing"):
            result = await self._session.execute(
                select(WebsiteModel)
                .where(WebsiteModel.owner_id == owner_id)
                .order_by(WebsiteModel.id.desc())
            )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def create(self, website: Website) -> Website:
        model = WebsiteModel(
            name=website.name,
            about=website.about,
            owner_id=website.owner_id,
            created_at=website.created_at,
            updated_at=website.updated_at,
        )
        conflict = DuplicateEntityError("Website", "name", website.name)
        with translate_store_errors("website create", conflict=conflict):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def update(self, website: Website) -> Website:
        conflict = DuplicateEntityError("Website", "name", website.name)
        with translate_store_errors("website update", conflict=conflict):
            model = await self._session.get(WebsiteModel, website.id)
            if model is None:
                raise ValueError(f"Website {website.id} not found in database")
            model.name = website.name
            model.about = website.about
            model.updated_at = website.updated_at
            await self._session.flush()
        return self._to_entity(model)

    async def delete(self, website_id: int) -> bool:
        with translate_store_errors("website delete"):
            model = await self._session.get(WebsiteModel, website_id)
            if model is None:
                return False
            # Child rows go explicitly; not every backend enforces ON DELETE CASCADE
            await self._session.execute(
                delete(MediaItemModel).where(MediaItemModel.website_id == website_id)
            )
            await self._session.execute(
                delete(CarouselItemModel).where(CarouselItemModel.website_id == website_id)
            )
            await self._session.delete(model)
            await self._session.flush()
        return True
