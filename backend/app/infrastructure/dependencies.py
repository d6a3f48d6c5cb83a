"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from datetime import timedelta

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.application.interfaces import TransformConstraints
from app.application.services import (
    ActivityRecorder,
    AuthService,
    CarouselService,
    ImageService,
    MediaPipeline,
    OrphanBlobSweeper,
    OwnershipGuard,
    WebsiteService,
)
from app.domain.entities import RequestContext, User
from app.domain.exceptions import AuthenticationError
from app.infrastructure.database.session import get_db_session
from app.infrastructure.database.unit_of_work import SQLAlchemyUnitOfWork
from app.infrastructure.database.repositories import (
    SQLAlchemyActivityLogRepository,
    SQLAlchemyCarouselItemRepository,
    SQLAlchemyMediaItemRepository,
    SQLAlchemyUserRepository,
    SQLAlchemyWebsiteRepository,
)
from app.infrastructure.imaging.pillow_image_transformer import PillowImageTransformer
from app.infrastructure.security.credentials import BcryptPasswordHasher, JoseTokenService
from app.infrastructure.storage.local_file_storage import LocalBlobStorage

_bearer = HTTPBearer(auto_error=False)


def build_blob_storage() -> LocalBlobStorage:
    settings = get_settings()
    return LocalBlobStorage(settings.upload_dir, settings.public_base_url)


def build_media_pipeline() -> MediaPipeline:
    """Media pipeline configured from settings (limits, bounding box, timeout)."""
    settings = get_settings()
    return MediaPipeline(
        storage=build_blob_storage(),
        transformer=PillowImageTransformer(),
        constraints=TransformConstraints(
            max_width=settings.image_max_width,
            max_height=settings.image_max_height,
            quality=settings.image_quality,
            max_pixels=settings.image_max_input_pixels,
        ),
        allowed_mime_types=settings.allowed_mime_types,
        max_upload_bytes=settings.max_upload_bytes,
        timeout=settings.operation_timeout_seconds,
    )


def build_auth_service(session: AsyncSession) -> AuthService:
    settings = get_settings()
    return AuthService(
        repository=SQLAlchemyUserRepository(session),
        hasher=BcryptPasswordHasher(),
        tokens=JoseTokenService(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        ),
        unit_of_work=SQLAlchemyUnitOfWork(session),
    )


def build_orphan_sweeper(session: AsyncSession) -> OrphanBlobSweeper:
    settings = get_settings()
    return OrphanBlobSweeper(
        storage=build_blob_storage(),
        images=SQLAlchemyMediaItemRepository(session),
        carousel_items=SQLAlchemyCarouselItemRepository(session),
        grace_period=timedelta(minutes=settings.orphan_grace_minutes),
    )


def _activity_recorder(session: AsyncSession) -> ActivityRecorder:
    return ActivityRecorder(SQLAlchemyActivityLogRepository(session), SQLAlchemyUnitOfWork(session))


def _ownership_guard(session: AsyncSession) -> OwnershipGuard:
    return OwnershipGuard(SQLAlchemyWebsiteRepository(session))


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AuthService, None]:
    """Provides an AuthService with hashing and token adapters wired up."""
    yield build_auth_service(session)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    service: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the bearer token of the request to a user, or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    return await service.authenticate(credentials.credentials)


def get_request_context(request: Request) -> RequestContext:
    return RequestContext(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


async def get_website_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[WebsiteService, None]:
    """Provides a WebsiteService with child repositories and blob cleanup wired up."""
    yield WebsiteService(
        repository=SQLAlchemyWebsiteRepository(session),
        images=SQLAlchemyMediaItemRepository(session),
        carousel_items=SQLAlchemyCarouselItemRepository(session),
        guard=_ownership_guard(session),
        pipeline=build_media_pipeline(),
        unit_of_work=SQLAlchemyUnitOfWork(session),
        activity=_activity_recorder(session),
    )


async def get_image_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ImageService, None]:
    """Provides an ImageService with the media pipeline wired up."""
    yield ImageService(
        repository=SQLAlchemyMediaItemRepository(session),
        guard=_ownership_guard(session),
        pipeline=build_media_pipeline(),
        unit_of_work=SQLAlchemyUnitOfWork(session),
        activity=_activity_recorder(session),
    )


async def get_carousel_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CarouselService, None]:
    """Provides a CarouselService with the media pipeline wired up."""
    yield CarouselService(
        repository=SQLAlchemyCarouselItemRepository(session),
        guard=_ownership_guard(session),
        pipeline=build_media_pipeline(),
        unit_of_work=SQLAlchemyUnitOfWork(session),
        activity=_activity_recorder(session),
    )


async def get_activity_recorder(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ActivityRecorder, None]:
    yield _activity_recorder(session)
