from .user_repository import UserRepository
from .website_repository import WebsiteRepository
from .media_item_repository import MediaItemRepository
from .carousel_item_repository import CarouselItemRepository
from .activity_log_repository import ActivityLogRepository
from .unit_of_work import UnitOfWork
from .blob_storage import BlobInfo, BlobStorage, StoredBlob
from .image_transformer import ImageTransformer, TransformConstraints, TransformedImage
from .credentials import PasswordHasher, TokenService

__all__ = [
    "UserRepository",
    "WebsiteRepository",
    "MediaItemRepository",
    "CarouselItemRepository",
    "ActivityLogRepository",
    "UnitOfWork",
    "BlobInfo",
    "BlobStorage",
    "StoredBlob",
    "ImageTransformer",
    "TransformConstraints",
    "TransformedImage",
    "PasswordHasher",
    "TokenService",
]
