"""Domain entities for the append-only activity log."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ActivityAction(str, Enum):
    """Every mutating operation on websites and their children."""

    CREATE_WEBSITE = "create_website"
    UPDATE_WEBSITE = "update_website"
    DELETE_WEBSITE = "delete_website"
    CREATE_IMAGE = "create_image"
    UPDATE_IMAGE = "update_image"
    DELETE_IMAGE = "delete_image"
    CREATE_CAROUSEL_ITEM = "create_carousel_item"
    UPDATE_CAROUSEL_ITEM = "update_carousel_item"
    DELETE_CAROUSEL_ITEM = "delete_carousel_item"
    REORDER_CAROUSEL = "reorder_carousel"


@dataclass(frozen=True)
class RequestContext:
    """Caller metadata captured from the incoming request."""

    ip_address: str | None = None
    user_agent: str | None = None


@dataclass
class ActivityEntry:
    """A single audit record. Never mutated once persisted."""

    user_id: int
    action: ActivityAction
    details: dict[str, Any] = field(default_factory=dict)
    ip_address: str | None = None
    user_agent: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
