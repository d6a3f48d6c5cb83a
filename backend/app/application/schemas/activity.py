"""Pydantic DTOs for the activity log."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from app.domain.entities import ActivityAction


class ActivityEntryResponse(BaseModel):
    id: int
    action: ActivityAction
    details: dict[str, Any]
    ip_address: str | None
    user_agent: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
