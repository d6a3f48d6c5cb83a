"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from app.presentation.api.v1.endpoints.health import router as health_router
from app.presentation.api.v1.endpoints.auth import router as auth_router
from app.presentation.api.v1.endpoints.websites import router as websites_router
from app.presentation.api.v1.endpoints.images import router as images_router
from app.presentation.api.v1.endpoints.carousel import router as carousel_router
from app.presentation.api.v1.endpoints.activity import router as activity_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(websites_router)
router.include_router(images_router)
router.include_router(carousel_router)
router.include_router(activity_router)
