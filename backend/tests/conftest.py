"""Shared pytest configuration.

Safe defaults are set before any ``app`` module is imported so that
``app.main`` can be imported without a reachable PostgreSQL server.
"""

import io
import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test-default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("RATE_LIMIT_MAX_REQUESTS", "0")
os.environ.setdefault("UPLOAD_RATE_LIMIT_MAX_REQUESTS", "0")

import pytest
from PIL import Image


def _encode_image(width: int, height: int, fmt: str = "PNG", color=(200, 40, 40)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def image_bytes():
    """Factory encoding a solid-color image: ``image_bytes(w, h, fmt="PNG")``."""
    return _encode_image
