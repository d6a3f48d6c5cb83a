"""Carousel slide endpoints."""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.application.schemas.carousel import (
    CarouselItemCreate,
    CarouselItemResponse,
    CarouselItemUpdate,
    CarouselOrderEntry,
    PublicCarouselItemResponse,
    ReorderResult,
)
from app.application.services import CarouselService
from app.domain.entities import RequestContext, User
from app.infrastructure.dependencies import (
    get_carousel_service,
    get_current_user,
    get_request_context,
)
from app.presentation.api.v1.endpoints.forms import parse_form, read_upload

router = APIRouter(tags=["Carousel"])


@router.post(
    "/websites/{website_id}/carousel",
    response_model=CarouselItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_carousel_item(
    website_id: int,
    file: UploadFile | None = File(None),
    title: str | None = Form(None),
    subtitle: str | None = Form(None),
    active: bool | None = Form(None),
    order: int | None = Form(None),
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
    service: CarouselService = Depends(get_carousel_service),
) -> CarouselItemResponse:
    """Add a slide; without ``order`` it is appended after the last slide."""
    data = parse_form(
        CarouselItemCreate, title=title, subtitle=subtitle, active=active, order=order,
    )
    item = await service.create_item(
        current_user.id, website_id, data, await read_upload(file), context,
    )
    return CarouselItemResponse.model_validate(item)


@router.get(
    "/websites/{website_id}/carousel",
    response_model=list[PublicCarouselItemResponse],
)
async def list_public_carousel(
    website_id: int,
    service: CarouselService = Depends(get_carousel_service),
) -> list[PublicCarouselItemResponse]:
    """Active slides of a website by ascending order; no authentication required."""
    items = await service.list_items(website_id)
    return [PublicCarouselItemResponse.model_validate(i) for i in items]


@router.get(
    "/websites/{website_id}/carousel/manage",
    response_model=list[CarouselItemResponse],
)
async def list_managed_carousel(
    website_id: int,
    current_user: User = Depends(get_current_user),
    service: CarouselService = Depends(get_carousel_service),
) -> list[CarouselItemResponse]:
    items = await service.list_items(website_id, owner_id=current_user.id)
    return [CarouselItemResponse.model_validate(i) for i in items]


@router.post("/websites/{website_id}/carousel/reorder", response_model=ReorderResult)
async def reorder_carousel(
    website_id: int,
    entries: list[CarouselOrderEntry],
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
    service: CarouselService = Depends(get_carousel_service),
) -> ReorderResult:
    applied = await service.reorder_items(current_user.id, website_id, entries, context)
    return ReorderResult(applied=applied)


@router.get("/carousel/{item_id}", response_model=CarouselItemResponse)
async def get_carousel_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    service: CarouselService = Depends(get_carousel_service),
) -> CarouselItemResponse:
    item = await service.get_item(current_user.id, item_id)
    return CarouselItemResponse.model_validate(item)


@router.put("/carousel/{item_id}", response_model=CarouselItemResponse)
async def update_carousel_item(
    item_id: int,
    file: UploadFile | None = File(None),
    title: str | None = Form(None),
    subtitle: str | None = Form(None),
    clear_subtitle: bool = Form(False),
    active: bool | None = Form(None),
    order: int | None = Form(None),
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
    service: CarouselService = Depends(get_carousel_service),
) -> CarouselItemResponse:
    """Patch slide fields and/or replace its image; omitted fields are kept.

    An empty form field reads as omitted, so removing the subtitle takes
    ``clear_subtitle=true``.
    """
    patch = parse_form(
        CarouselItemUpdate, title=title, subtitle=subtitle, active=active, order=order,
    )
    if clear_subtitle:
        patch = patch.model_copy(update={"subtitle": None})
    item = await service.update_item(
        current_user.id, item_id, patch, await read_upload(file), context,
    )
    return CarouselItemResponse.model_validate(item)


@router.delete("/carousel/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_carousel_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
    service: CarouselService = Depends(get_carousel_service),
) -> None:
    await service.delete_item(current_user.id, item_id, context)
