"""Application service (use case) for carousel slides."""

import logging

from app.application.interfaces import CarouselItemRepository, UnitOfWork
from app.application.schemas.carousel import (
    CarouselItemCreate,
    CarouselItemUpdate,
    CarouselOrderEntry,
)
from app.application.services.activity_recorder import ActivityRecorder
from app.application.services.media_pipeline import IncomingFile, MediaPipeline
from app.application.services.ownership_guard import OwnershipGuard
from app.domain.entities import ActivityAction, CarouselItem, RequestContext

logger = logging.getLogger(__name__)


class CarouselService:
    """Owner-gated CRUD and reordering of carousel slides.

    Blob ordering rules:
        create — write the blob, then link it from a committed record
        update — link the new blob, commit, then delete the old blob
        delete — delete the record, commit, then delete the blob
    """

    BLOB_FOLDER = "carousel"

    def __init__(
        self,
        repository: CarouselItemRepository,
        guard: OwnershipGuard,
        pipeline: MediaPipeline,
        unit_of_work: UnitOfWork,
        activity: ActivityRecorder,
    ):
        self._repository = repository
        self._guard = guard
        self._pipeline = pipeline
        self._uow = unit_of_work
        self._activity = activity

    async def create_item(
        self,
        user_id: int,
        website_id: int,
        data: CarouselItemCreate,
        upload: IncomingFile | None,
        context: RequestContext | None = None,
    ) -> CarouselItem:
        """Create a slide. Without an explicit order it is appended at the end."""
        upload = self._pipeline.validate(upload, required=True)
        await self._guard.require_website(user_id, website_id)

        async with self._pipeline.stage(upload, self.BLOB_FOLDER) as media:
            order = data.order
            if order is None:
                order = await self._repository.next_order(website_id)
            item = CarouselItem(
                website_id=website_id,
                blob_key=media.key,
                url=media.url,
                title=data.title,
                subtitle=data.subtitle,
                active=data.active,
                order=order,
            )
            item = await self._repository.create(item)
            await self._pipeline.bounded_commit(self._uow, "save carousel item")

        logger.info("Created carousel item %s on website %s (order=%d)", item.id, website_id, item.order)
        await self._activity.record(
            user_id,
            ActivityAction.CREATE_CAROUSEL_ITEM,
            {"carousel_item_id": item.id, "website_id": website_id, "title": item.title},
            context,
        )
        return item

    async def get_item(self, user_id: int, item_id: int) -> CarouselItem:
        item = await self._repository.get_by_id(item_id)
        await self._guard.require_child(user_id, item, "CarouselItem", item_id)
        return item

    async def list_items(self, website_id: int, *, owner_id: int | None = None) -> list[CarouselItem]:
        """Slides of a website by ascending order.

        With ``owner_id`` the listing is owner-gated and includes inactive
        slides; without it only active slides are returned.
        """
        if owner_id is not None:
            await self._guard.require_website(owner_id, website_id)
            return await self._repository.list_by_website(website_id)
        return await self._repository.list_by_website(website_id, active_only=True)

    async def update_item(
        self,
        user_id: int,
        item_id: int,
        patch: CarouselItemUpdate,
        upload: IncomingFile | None = None,
        context: RequestContext | None = None,
    ) -> CarouselItem:
        """Merge ``patch`` into the slide and optionally replace its image.

        Only fields set on ``patch`` change; an explicit ``subtitle=None``
        clears the subtitle.
        """
        upload = self._pipeline.validate(upload, required=False)
        item = await self.get_item(user_id, item_id)
        changes = patch.model_dump(exclude_unset=True)

        if upload is None:
            item.update(**changes)
            item = await self._repository.update(item)
            await self._pipeline.bounded_commit(self._uow, "update carousel item")
        else:
            old_key = item.blob_key
            async with self._pipeline.stage(upload, self.BLOB_FOLDER) as media:
                item.replace_blob(media.key, media.url)
                item.update(**changes)
                item = await self._repository.update(item)
                await self._pipeline.bounded_commit(self._uow, "update carousel item")
            await self._pipeline.discard(old_key)
            changes["image_replaced"] = True

        await self._activity.record(
            user_id,
            ActivityAction.UPDATE_CAROUSEL_ITEM,
            {"carousel_item_id": item_id, "website_id": item.website_id, "changes": changes},
            context,
        )
        return item

    async def delete_item(
        self, user_id: int, item_id: int, context: RequestContext | None = None
    ) -> None:
        item = await self.get_item(user_id, item_id)

        await self._repository.delete(item_id)
        await self._pipeline.bounded_commit(self._uow, "delete carousel item")
        await self._pipeline.discard(item.blob_key)

        await self._activity.record(
            user_id,
            ActivityAction.DELETE_CAROUSEL_ITEM,
            {"carousel_item_id": item_id, "website_id": item.website_id},
            context,
        )

    async def reorder_items(
        self,
        user_id: int,
        website_id: int,
        entries: list[CarouselOrderEntry],
        context: RequestContext | None = None,
    ) -> int:
        """Assign new orders to slides of one website.

        Entries naming a slide of another website are ignored rather than
        rejecting the batch. Returns the number of entries applied.
        """
        await self._guard.require_website(user_id, website_id)

        pairs = [(entry.id, entry.order) for entry in entries]
        applied = await self._repository.update_orders(website_id, pairs)
        await self._pipeline.bounded_commit(self._uow, "reorder carousel")

        if applied != len(pairs):
            logger.info(
                "Reorder on website %s ignored %d of %d entries",
                website_id, len(pairs) - applied, len(pairs),
            )
        await self._activity.record(
            user_id,
            ActivityAction.REORDER_CAROUSEL,
            {"website_id": website_id, "requested": len(pairs), "applied": applied},
            context,
        )
        return applied
