from .auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from .media import MediaItemResponse, PublicMediaItemResponse
from .carousel import (
    CarouselItemCreate,
    CarouselItemResponse,
    CarouselItemUpdate,
    CarouselOrderEntry,
    PublicCarouselItemResponse,
    ReorderResult,
)
from .website import (
    WebsiteCreate,
    WebsiteDetailResponse,
    WebsiteResponse,
    WebsiteSummaryResponse,
    WebsiteUpdate,
)
from .activity import ActivityEntryResponse
from .errors import ErrorResponse

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    "MediaItemResponse",
    "PublicMediaItemResponse",
    "CarouselItemCreate",
    "CarouselItemResponse",
    "CarouselItemUpdate",
    "CarouselOrderEntry",
    "PublicCarouselItemResponse",
    "ReorderResult",
    "WebsiteCreate",
    "WebsiteDetailResponse",
    "WebsiteResponse",
    "WebsiteSummaryResponse",
    "WebsiteUpdate",
    "ActivityEntryResponse",
    "ErrorResponse",
]
