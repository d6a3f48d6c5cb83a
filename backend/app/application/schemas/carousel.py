"""Pydantic DTOs for carousel slides."""

from datetime import datetime

from pydantic import BaseModel, Field


class CarouselItemCreate(BaseModel):
    """Form fields accompanying a carousel image upload."""

    title: str = Field(..., min_length=1, max_length=100)
    subtitle: str | None = Field(None, max_length=200)
    active: bool = True
    order: int | None = Field(None, ge=0)


class CarouselItemUpdate(BaseModel):
    """Partial patch; omitted fields keep their current value.

    Setting ``subtitle`` to None explicitly removes the subtitle.
    """

    title: str | None = Field(None, min_length=1, max_length=100)
    subtitle: str | None = Field(None, max_length=200)
    active: bool | None = None
    order: int | None = Field(None, ge=0)


class CarouselOrderEntry(BaseModel):
    id: int
    order: int = Field(..., ge=0)


class ReorderResult(BaseModel):
    applied: int


class CarouselItemResponse(BaseModel):
    """Owner view of a carousel slide."""

    id: int
    website_id: int
    url: str
    title: str
    subtitle: str | None
    active: bool
    order: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PublicCarouselItemResponse(BaseModel):
    """Fields that are safe to show on a public page."""

    id: int
    url: str
    title: str
    subtitle: str | None
    order: int

    model_config = {"from_attributes": True}
