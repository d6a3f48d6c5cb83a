"""Fixtures running the real application against a throwaway SQLite database."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import get_settings
from app.infrastructure.database import Base
from app.infrastructure.database.session import (
    dispose_engine,
    get_session_factory,
    init_engine,
)
from app.main import create_app


@pytest_asyncio.fixture
async def app_factory(tmp_path, monkeypatch):
    """Build an app whose database and uploads live in ``tmp_path``.

    Extra keyword arguments become environment variables, e.g.
    ``await app_factory(RATE_LIMIT_MAX_REQUESTS="2")``.
    """
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cms.db'}")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("PUBLIC_BASE_URL", "http://test")

    def build(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        get_settings.cache_clear()
        return create_app()

    yield build
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def client(app_factory):
    app = app_factory()
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as http:
            yield http


@pytest_asyncio.fixture
async def session(tmp_path):
    engine = init_engine(f"sqlite:///{tmp_path / 'repos.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with get_session_factory()() as db_session:
        yield db_session
    await dispose_engine()
