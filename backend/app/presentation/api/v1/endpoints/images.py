"""Image upload and management endpoints."""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.application.schemas.media import MediaItemResponse, PublicMediaItemResponse
from app.application.services import ImageService
from app.domain.entities import RequestContext, User
from app.infrastructure.dependencies import (
    get_current_user,
    get_image_service,
    get_request_context,
)
from app.presentation.api.v1.endpoints.forms import read_upload

router = APIRouter(tags=["Images"])


@router.post(
    "/websites/{website_id}/images",
    response_model=MediaItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_image(
    website_id: int,
    file: UploadFile | None = File(None),
    alt_text: str | None = Form(None, max_length=255),
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
    service: ImageService = Depends(get_image_service),
) -> MediaItemResponse:
    """Normalize the uploaded image and attach it to the website."""
    item = await service.upload_image(
        current_user.id, website_id, await read_upload(file), alt_text=alt_text, context=context,
    )
    return MediaItemResponse.model_validate(item)


@router.get("/websites/{website_id}/images", response_model=list[PublicMediaItemResponse])
async def list_public_images(
    website_id: int,
    service: ImageService = Depends(get_image_service),
) -> list[PublicMediaItemResponse]:
    """Public gallery of a website; no authentication required."""
    items = await service.list_images(website_id)
    return [PublicMediaItemResponse.model_validate(i) for i in items]


@router.get("/images", response_model=list[MediaItemResponse])
async def list_my_images(
    current_user: User = Depends(get_current_user),
    service: ImageService = Depends(get_image_service),
) -> list[MediaItemResponse]:
    items = await service.list_user_images(current_user.id)
    return [MediaItemResponse.model_validate(i) for i in items]


@router.get("/images/{image_id}", response_model=MediaItemResponse)
async def get_image(
    image_id: int,
    current_user: User = Depends(get_current_user),
    service: ImageService = Depends(get_image_service),
) -> MediaItemResponse:
    item = await service.get_image(current_user.id, image_id)
    return MediaItemResponse.model_validate(item)


@router.put("/images/{image_id}", response_model=MediaItemResponse)
async def update_image(
    image_id: int,
    file: UploadFile | None = File(None),
    alt_text: str | None = Form(None, max_length=255),
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
    service: ImageService = Depends(get_image_service),
) -> MediaItemResponse:
    """Patch the alt text and/or replace the image file."""
    item = await service.update_image(
        current_user.id,
        image_id,
        alt_text=alt_text,
        upload=await read_upload(file),
        context=context,
    )
    return MediaItemResponse.model_validate(item)


@router.delete("/images/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_image(
    image_id: int,
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
    service: ImageService = Depends(get_image_service),
) -> None:
    await service.delete_image(current_user.id, image_id, context)
