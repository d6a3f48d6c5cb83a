from .user import User
from .website import Website
from .media_item import MediaItem
from .carousel_item import CarouselItem
from .activity_entry import ActivityAction, ActivityEntry, RequestContext

__all__ = [
    "User",
    "Website",
    "MediaItem",
    "CarouselItem",
    "ActivityAction",
    "ActivityEntry",
    "RequestContext",
]
