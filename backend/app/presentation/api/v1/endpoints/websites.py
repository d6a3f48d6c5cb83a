"""Website CRUD endpoints — every route is scoped to the caller's own websites."""

from fastapi import APIRouter, Depends, status

from app.application.schemas.carousel import CarouselItemResponse
from app.application.schemas.media import MediaItemResponse
from app.application.schemas.website import (
    WebsiteCreate,
    WebsiteDetailResponse,
    WebsiteResponse,
    WebsiteSummaryResponse,
    WebsiteUpdate,
)
from app.application.services import WebsiteService
from app.domain.entities import RequestContext, User
from app.infrastructure.dependencies import (
    get_current_user,
    get_request_context,
    get_website_service,
)

router = APIRouter(prefix="/websites", tags=["Websites"])


@router.get("", response_model=list[WebsiteSummaryResponse])
async def list_websites(
    current_user: User = Depends(get_current_user),
    service: WebsiteService = Depends(get_website_service),
) -> list[WebsiteSummaryResponse]:
    """The caller's websites, newest first, with child counts and a thumbnail."""
    summaries = await service.list_websites(current_user.id)
    return [
        WebsiteSummaryResponse(
            **WebsiteResponse.model_validate(s.website).model_dump(),
            image_count=s.image_count,
            carousel_item_count=s.carousel_item_count,
            thumbnail_url=s.thumbnail_url,
        )
        for s in summaries
    ]


@router.get("/{website_id}", response_model=WebsiteDetailResponse)
async def get_website(
    website_id: int,
    current_user: User = Depends(get_current_user),
    service: WebsiteService = Depends(get_website_service),
) -> WebsiteDetailResponse:
    detail = await service.get_website_detail(current_user.id, website_id)
    return WebsiteDetailResponse(
        **WebsiteResponse.model_validate(detail.website).model_dump(),
        images=[MediaItemResponse.model_validate(i) for i in detail.images],
        carousel_items=[CarouselItemResponse.model_validate(c) for c in detail.carousel_items],
    )


@router.post("", response_model=WebsiteResponse, status_code=status.HTTP_201_CREATED)
async def create_website(
    data: WebsiteCreate,
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
    service: WebsiteService = Depends(get_website_service),
) -> WebsiteResponse:
    website = await service.create_website(current_user.id, data, context)
    return WebsiteResponse.model_validate(website)


@router.put("/{website_id}", response_model=WebsiteResponse)
async def update_website(
    website_id: int,
    data: WebsiteUpdate,
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
    service: WebsiteService = Depends(get_website_service),
) -> WebsiteResponse:
    website = await service.update_website(current_user.id, website_id, data, context)
    return WebsiteResponse.model_validate(website)


@router.delete("/{website_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_website(
    website_id: int,
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
    service: WebsiteService = Depends(get_website_service),
) -> None:
    """Delete a website together with its images and carousel slides."""
    await service.delete_website(current_user.id, website_id, context)
