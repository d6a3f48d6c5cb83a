"""Health check endpoint — no authentication, never raises."""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.infrastructure.database.session import get_engine

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


async def _database_status() -> str:
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (RuntimeError, SQLAlchemyError, OSError) as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        return "unavailable"
    return "ok"


@router.get("/health")
async def health_check() -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    database = await _database_status()
    return {
        "status": "healthy" if database == "ok" else "degraded",
        "version": settings.app_version,
        "environment": settings.app_env,
        "database": database,
    }
