"""Pydantic DTOs (Data Transfer Objects) for the Website feature."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.application.schemas.carousel import CarouselItemResponse
from app.application.schemas.media import MediaItemResponse


class WebsiteCreate(BaseModel):
    """Schema for creating a new website."""

    name: str = Field(..., min_length=1, max_length=100, examples=["sunset-tours"])
    about: str = Field(..., min_length=1, examples=["Guided tours along the coast."])


class WebsiteUpdate(BaseModel):
    """Schema for updating an existing website — all fields optional."""

    name: str | None = Field(None, min_length=1, max_length=100)
    about: str | None = Field(None, min_length=1)


class WebsiteResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    name: str
    about: str
    owner_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WebsiteSummaryResponse(WebsiteResponse):
    """List view — counts of children plus the newest image as thumbnail."""

    image_count: int
    carousel_item_count: int
    thumbnail_url: str | None = None


class WebsiteDetailResponse(WebsiteResponse):
    """Website together with all of its images and carousel slides."""

    images: list[MediaItemResponse]
    carousel_items: list[CarouselItemResponse]
