"""Domain entity — a tenant-scoped website owning images and carousel items."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Website:
    """Core domain entity representing a website.

    ``name`` is globally unique; ``owner_id`` never changes after creation.
    """

    name: str
    about: str
    owner_id: int
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner_id == user_id

    def update(self, name: str | None = None, about: str | None = None) -> None:
        """Update website fields and refresh the updated_at timestamp."""
        if name is not None:
            self.name = name
        if about is not None:
            self.about = about
        self.updated_at = datetime.now(timezone.utc)
