from .base import Base
from .session import (
    dispose_engine,
    get_db_session,
    get_engine,
    get_session_factory,
    init_engine,
)
from .models import (
    ActivityLogModel,
    CarouselItemModel,
    MediaItemModel,
    UserModel,
    WebsiteModel,
)

__all__ = [
    "Base",
    "dispose_engine",
    "get_db_session",
    "get_engine",
    "get_session_factory",
    "init_engine",
    "ActivityLogModel",
    "CarouselItemModel",
    "MediaItemModel",
    "UserModel",
    "WebsiteModel",
]
