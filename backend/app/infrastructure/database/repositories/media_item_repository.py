"""Concrete repository implementation for MediaItem backed by SQLAlchemy."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import MediaItemRepository
from app.domain.entities import MediaItem
from app.infrastructure.database.models import MediaItemModel, WebsiteModel
from app.infrastructure.database.repositories.errors import translate_store_errors


class SQLAlchemyMediaItemRepository(MediaItemRepository):
    """Implements the MediaItemRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: MediaItemModel) -> MediaItem:
        """Map ORM model → domain entity."""
        return MediaItem(
            id=model.id,
            website_id=model.website_id,
            blob_key=model.blob_key,
            url=model.url,
            width=model.width,
            height=model.height,
            original_filename=model.original_filename,
            file_size=model.file_size,
            mime_type=model.mime_type,
            alt_text=model.alt_text,
            created_at=model.created_at,
        )

    async def get_by_id(self, item_id: int) -> MediaItem | None:
        with translate_store_errors("image lookup"):
            model = await self._session.get(MediaItemModel, item_id)
        return self._to_entity(model) if model else None

    async def list_by_website(self, website_id: int) -> list[MediaItem]:
        with translate_store_errors("image listing"):
            result = await self._session.execute(
                select(MediaItemModel)
                .where(MediaItemModel.website_id == website_id)
                .order_by(MediaItemModel.created_at.desc(), MediaItemModel.id.desc())
            )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def list_by_owner(self, owner_id: int) -> list[MediaItem]:
        with translate_store_errors("image listing"):
            result = await self._session.execute(
                select(MediaItemModel)
                .join(WebsiteModel, WebsiteModel.id == MediaItemModel.website_id)
                .where(WebsiteModel.owner_id == owner_id)
                .order_by(MediaItemModel.created_at.desc(), MediaItemModel.id.desc())
            )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def count_by_website(self, website_id: int) -> int:
        with translate_store_errors("image count"):
            result = await self._session.execute(
                select(func.count())
                .select_from(MediaItemModel)
                .where(MediaItemModel.website_id == website_id)
            )
        return result.scalar_one()

    async def create(self, item: MediaItem) -> MediaItem:
        model = MediaItemModel(
            website_id=item.website_id,
            blob_key=item.blob_key,
            url=item.url,
            width=item.width,
            height=item.height,
            original_filename=item.original_filename,
            file_size=item.file_size,
            mime_type=item.mime_type,
            alt_text=item.alt_text,
            created_at=item.created_at,
        )
        with translate_store_errors("image create"):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def update(self, item: MediaItem) -> MediaItem:
        with translate_store_errors("image update"):
            model = await self._session.get(MediaItemModel, item.id)
            if model is None:
                raise ValueError(f"Image {item.id} not found in database")
            model.blob_key = item.blob_key
            model.url = item.url
            model.width = item.width
            model.height = item.height
            model.original_filename = item.original_filename
            model.file_size = item.file_size
            model.mime_type = item.mime_type
            model.alt_text = item.alt_text
            await self._session.flush()
        return self._to_entity(model)

    async def delete(self, item_id: int) -> bool:
        with translate_store_errors("image delete"):
            model = await self._session.get(MediaItemModel, item_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.flush()
        return True

    async def all_blob_keys(self) -> set[str]:
        with translate_store_errors("image blob scan"):
            result = await self._session.execute(select(MediaItemModel.blob_key))
        return set(result.scalars().all())
