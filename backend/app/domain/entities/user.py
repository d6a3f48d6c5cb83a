"""Domain entity — an authenticated principal."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class User:
    """A registered account that can own websites.

    ``password_hash`` is the opaque digest produced by the configured
    ``PasswordHasher``; the plain password never reaches this object.
    """

    username: str
    email: str
    password_hash: str
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
