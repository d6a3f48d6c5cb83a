"""Concrete repository implementation for CarouselItem backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import CarouselItemRepository
from app.domain.entities import CarouselItem
from app.infrastructure.database.models import CarouselItemModel, WebsiteModel
from app.infrastructure.database.repositories.errors import translate_store_errors


class SQLAlchemyCarouselItemRepository(CarouselItemRepository):
    """Implements the CarouselItemRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CarouselItemModel) -> CarouselItem:
        """Map ORM model → domain entity."""
        return CarouselItem(
            id=model.id,
            website_id=model.website_id,
            blob_key=model.blob_key,
            url=model.url,
            title=model.title,
            subtitle=model.subtitle,
            active=model.active,
            order=model.order,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, item_id: int) -> CarouselItem | None:
        with translate_store_errors("carousel lookup"):
            model = await self._session.get(CarouselItemModel, item_id)
        return self._to_entity(model) if model else None

    async def list_by_website(
        self, website_id: int, *, active_only: bool = False
    ) -> list[CarouselItem]:
        stmt = select(CarouselItemModel).where(CarouselItemModel.website_id == website_id)
        if active_only:
            stmt = stmt.where(CarouselItemModel.active.is_(True))
        stmt = stmt.order_by(CarouselItemModel.order.asc(), CarouselItemModel.id.asc())

        with translate_store_errors("carousel listing"):
            result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def count_by_website(self, website_id: int) -> int:
        with translate_store_errors("carousel count"):
            result = await self._session.execute(
                select(func.count())
                .select_from(CarouselItemModel)
                .where(CarouselItemModel.website_id == website_id)
            )
        return result.scalar_one()

    async def next_order(self, website_id: int) -> int:
        with translate_store_errors("carousel order allocation"):
            # Row lock on the parent serializes appends until commit (no-op on SQLite,
            # which serializes writers database-wide).
            await self._session.execute(
                select(WebsiteModel.id).where(WebsiteModel.id == website_id).with_for_update()
            )
            result = await self._session.execute(
                select(func.coalesce(func.max(CarouselItemModel.order), -1))
                .where(CarouselItemModel.website_id == website_id)
            )
        return result.scalar_one() + 1

    async def create(self, item: CarouselItem) -> CarouselItem:
        model = CarouselItemModel(
            website_id=item.website_id,
            blob_key=item.blob_key,
            url=item.url,
            title=item.title,
            subtitle=item.subtitle,
            active=item.active,
            order=item.order,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )
        with translate_store_errors("carousel create"):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def update(self, item: CarouselItem) -> CarouselItem:
        with translate_store_errors("carousel update"):
            model = await self._session.get(CarouselItemModel, item.id)
            if model is None:
                raise ValueError(f"CarouselItem {item.id} not found in database")
            model.blob_key = item.blob_key
            model.url = item.url
            model.title = item.title
            model.subtitle = item.subtitle
            model.active = item.active
            model.order = item.order
            model.updated_at = item.updated_at
            await self._session.flush()
        return self._to_entity(model)

    async def update_orders(self, website_id: int, orders: list[tuple[int, int]]) -> int:
        applied = 0
        now = datetime.now(timezone.utc)
        with translate_store_errors("carousel reorder"):
            for item_id, order in orders:
                # Each pair is one statement; the website filter drops foreign ids
                result = await self._session.execute(
                    update(CarouselItemModel)
                    .where(
                        CarouselItemModel.id == item_id,
                        CarouselItemModel.website_id == website_id,
                    )
                    .values(order=order, updated_at=now)
                )
                applied += result.rowcount
        return applied

    async def delete(self, item_id: int) -> bool:
        with translate_store_errors("carousel delete"):
            model = await self._session.get(CarouselItemModel, item_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.flush()
        return True

    async def all_blob_keys(self) -> set[str]:
        with translate_store_errors("carousel blob scan"):
            result = await self._session.execute(select(CarouselItemModel.blob_key))
        return set(result.scalars().all())
