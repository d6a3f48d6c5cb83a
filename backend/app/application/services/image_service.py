"""Application service (use case) for website images."""

import logging

from app.application.interfaces import MediaItemRepository, UnitOfWork
from app.application.services.activity_recorder import ActivityRecorder
from app.application.services.media_pipeline import IncomingFile, MediaPipeline
from app.application.services.ownership_guard import OwnershipGuard
from app.domain.entities import ActivityAction, MediaItem, RequestContext

logger = logging.getLogger(__name__)


class ImageService:
    """Owner-gated upload, replacement, and removal of website images."""

    BLOB_FOLDER = "images"

    def __init__(
        self,
        repository: MediaItemRepository,
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

    async def upload_image(
        self,
        user_id: int,
        website_id: int,
        upload: IncomingFile | None,
        alt_text: str | None = None,
        context: RequestContext | None = None,
    ) -> MediaItem:
        upload = self._pipeline.validate(upload, required=True)
        await self._guard.require_website(user_id, website_id)

        async with self._pipeline.stage(upload, self.BLOB_FOLDER) as media:
            item = MediaItem(
                website_id=website_id,
                blob_key=media.key,
                url=media.url,
                width=media.width,
                height=media.height,
                original_filename=media.original_filename,
                file_size=media.file_size,
                mime_type=media.mime_type,
                alt_text=alt_text,
            )
            item = await self._repository.create(item)
            await self._pipeline.bounded_commit(self._uow, "save image")

        await self._activity.record(
            user_id,
            ActivityAction.CREATE_IMAGE,
            {"image_id": item.id, "website_id": website_id, "filename": item.original_filename},
            context,
        )
        return item

    async def get_image(self, user_id: int, image_id: int) -> MediaItem:
        item = await self._repository.get_by_id(image_id)
        await self._guard.require_child(user_id, item, "Image", image_id)
        return item

    async def list_images(self, website_id: int, *, owner_id: int | None = None) -> list[MediaItem]:
        """Images of a website, newest first. Images carry no visibility flag."""
        if owner_id is not None:
            await self._guard.require_website(owner_id, website_id)
        return await self._repository.list_by_website(website_id)

    async def list_user_images(self, user_id: int) -> list[MediaItem]:
        return await self._repository.list_by_owner(user_id)

    async def update_image(
        self,
        user_id: int,
        image_id: int,
        *,
        alt_text: str | None = None,
        upload: IncomingFile | None = None,
        context: RequestContext | None = None,
    ) -> MediaItem:
        upload = self._pipeline.validate(upload, required=False)
        item = await self.get_image(user_id, image_id)
        changes: dict = {}
        if alt_text is not None:
            changes["alt_text"] = alt_text

        if upload is None:
            item.update(alt_text=alt_text)
            item = await self._repository.update(item)
            await self._pipeline.bounded_commit(self._uow, "update image")
        else:
            old_key = item.blob_key
            async with self._pipeline.stage(upload, self.BLOB_FOLDER) as media:
                item.replace_blob(
                    media.key, media.url, media.width, media.height,
                    media.original_filename, media.file_size, media.mime_type,
                )
                item.update(alt_text=alt_text)
                item = await self._repository.update(item)
                await self._pipeline.bounded_commit(self._uow, "update image")
            await self._pipeline.discard(old_key)
            changes["image_replaced"] = True

        await self._activity.record(
            user_id,
            ActivityAction.UPDATE_IMAGE,
            {"image_id": image_id, "website_id": item.website_id, "changes": changes},
            context,
        )
        return item

    async def delete_image(
        self, user_id: int, image_id: int, context: RequestContext | None = None
    ) -> None:
        item = await self.get_image(user_id, image_id)

        await self._repository.delete(image_id)
        await self._pipeline.bounded_commit(self._uow, "delete image")
        await self._pipeline.discard(item.blob_key)

        logger.info("Deleted image %s from website %s", image_id, item.website_id)
        await self._activity.record(
            user_id,
            ActivityAction.DELETE_IMAGE,
            {"image_id": image_id, "website_id": item.website_id},
            context,
        )
