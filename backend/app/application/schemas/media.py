"""Pydantic DTOs for uploaded images."""

from datetime import datetime

from pydantic import BaseModel


class MediaItemResponse(BaseModel):
    """Owner view of an image."""

    id: int
    website_id: int
    url: str
    width: int
    height: int
    original_filename: str
    file_size: int
    mime_type: str
    alt_text: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class PublicMediaItemResponse(BaseModel):
    """Fields that are safe to show on a public gallery."""

    id: int
    url: str
    width: int
    height: int
    alt_text: str | None

    model_config = {"from_attributes": True}
