from .user import UserModel
from .website import WebsiteModel
from .media_item import MediaItemModel
from .carousel_item import CarouselItemModel
from .activity_log import ActivityLogModel

__all__ = [
    "UserModel",
    "WebsiteModel",
    "MediaItemModel",
    "CarouselItemModel",
    "ActivityLogModel",
]
