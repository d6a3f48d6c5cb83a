"""Application service (use case) for websites."""

import logging
from dataclasses import dataclass

from app.application.interfaces import (
    CarouselItemRepository,
    MediaItemRepository,
    UnitOfWork,
    WebsiteRepository,
)
from app.application.schemas.website import WebsiteCreate, WebsiteUpdate
from app.application.services.activity_recorder import ActivityRecorder
from app.application.services.media_pipeline import MediaPipeline
from app.application.services.ownership_guard import OwnershipGuard
from app.domain.entities import (
    ActivityAction,
    CarouselItem,
    MediaItem,
    RequestContext,
    Website,
)
from app.domain.exceptions import DuplicateEntityError

logger = logging.getLogger(__name__)


@dataclass
class WebsiteSummary:
    website: Website
    image_count: int
    carousel_item_count: int
    thumbnail_url: str | None


@dataclass
class WebsiteDetail:
    website: Website
    images: list[MediaItem]
    carousel_items: list[CarouselItem]


class WebsiteService:
    """Orchestrates website business logic. Depends on the repository ports (DI)."""

    def __init__(
        self,
        repository: WebsiteRepository,
        images: MediaItemRepository,
        carousel_items: CarouselItemRepository,
        guard: OwnershipGuard,
        pipeline: MediaPipeline,
        unit_of_work: UnitOfWork,
        activity: ActivityRecorder,
    ):
        self._repository = repository
        self._images = images
        self._carousel_items = carousel_items
        self._guard = guard
        self._pipeline = pipeline
        self._uow = unit_of_work
        self._activity = activity

    async def create_website(
        self, owner_id: int, data: WebsiteCreate, context: RequestContext | None = None
    ) -> Website:
        if await self._repository.get_by_name(data.name) is not None:
            raise DuplicateEntityError("Website", "name", data.name)

        website = await self._repository.create(
            Website(name=data.name, about=data.about, owner_id=owner_id)
        )
        await self._uow.commit()

        await self._activity.record(
            owner_id,
            ActivityAction.CREATE_WEBSITE,
            {"website_id": website.id, "website_name": website.name},
            context,
        )
        return website

    async def get_website(self, user_id: int, website_id: int) -> Website:
        return await self._guard.require_website(user_id, website_id)

    async def get_website_detail(self, user_id: int, website_id: int) -> WebsiteDetail:
        website = await self._guard.require_website(user_id, website_id)
        return WebsiteDetail(
            website=website,
            images=await self._images.list_by_website(website_id),
            carousel_items=await self._carousel_items.list_by_website(website_id),
        )

    async def list_websites(self, owner_id: int) -> list[WebsiteSummary]:
        summaries: list[WebsiteSummary] = []
        for website in await self._repository.list_by_owner(owner_id):
            images = await self._images.list_by_website(website.id)
            summaries.append(
                WebsiteSummary(
                    website=website,
                    image_count=len(images),
                    carousel_item_count=await self._carousel_items.count_by_website(website.id),
                    thumbnail_url=images[0].url if images else None,
                )
            )
        return summaries

    async def update_website(
        self,
        user_id: int,
        website_id: int,
        data: WebsiteUpdate,
        context: RequestContext | None = None,
    ) -> Website:
        website = await self._guard.require_website(user_id, website_id)

        if data.name is not None and data.name != website.name:
            if await self._repository.get_by_name(data.name) is not None:
                raise DuplicateEntityError("Website", "name", data.name)

        website.update(name=data.name, about=data.about)
        website = await self._repository.update(website)
        await self._uow.commit()

        await self._activity.record(
            user_id,
            ActivityAction.UPDATE_WEBSITE,
            {"website_id": website_id, "changes": data.model_dump(exclude_unset=True)},
            context,
        )
        return website

    async def delete_website(
        self, user_id: int, website_id: int, context: RequestContext | None = None
    ) -> None:
        """Delete a website, all of its child records, and then their blobs."""
        website = await self._guard.require_website(user_id, website_id)

        images = await self._images.list_by_website(website_id)
        slides = await self._carousel_items.list_by_website(website_id)
        blob_keys = [i.blob_key for i in images] + [s.blob_key for s in slides]

        await self._repository.delete(website_id)
        await self._uow.commit()

        for key in blob_keys:
            await self._pipeline.discard(key)

        logger.info(
            "Deleted website %s with %d image(s) and %d slide(s)",
            website_id, len(images), len(slides),
        )
        await self._activity.record(
            user_id,
            ActivityAction.DELETE_WEBSITE,
            {
                "website_id": website_id,
                "website_name": website.name,
                "deleted_images": len(images),
                "deleted_carousel_items": len(slides),
            },
            context,
        )
