from .activity_recorder import ActivityRecorder
from .auth_service import AuthService
from .carousel_service import CarouselService
from .image_service import ImageService
from .media_pipeline import IncomingFile, MediaPipeline, StagedMedia
from .orphan_blob_sweeper import OrphanBlobSweeper, SweepReport
from .ownership_guard import OwnershipGuard
from .website_service import WebsiteDetail, WebsiteService, WebsiteSummary

__all__ = [
    "ActivityRecorder",
    "AuthService",
    "CarouselService",
    "ImageService",
    "IncomingFile",
    "MediaPipeline",
    "StagedMedia",
    "OrphanBlobSweeper",
    "SweepReport",
    "OwnershipGuard",
    "WebsiteDetail",
    "WebsiteService",
    "WebsiteSummary",
]
