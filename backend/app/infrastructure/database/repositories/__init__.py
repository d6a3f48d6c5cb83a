from .user_repository import SQLAlchemyUserRepository
from .website_repository import SQLAlchemyWebsiteRepository
from .media_item_repository import SQLAlchemyMediaItemRepository
from .carousel_item_repository import SQLAlchemyCarouselItemRepository
from .activity_log_repository import SQLAlchemyActivityLogRepository

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyWebsiteRepository",
    "SQLAlchemyMediaItemRepository",
    "SQLAlchemyCarouselItemRepository",
    "SQLAlchemyActivityLogRepository",
]
