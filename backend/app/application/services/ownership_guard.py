"""Single authorization predicate for everything scoped to a website."""

from typing import Protocol

from app.application.interfaces import WebsiteRepository
from app.domain.entities import Website
from app.domain.exceptions import NotFoundOrForbiddenError


class _WebsiteScoped(Protocol):
    website_id: int


class OwnershipGuard:
    """Decides whether a user may touch a website and its children.

    Missing and foreign resources raise the same NotFoundOrForbiddenError,
    so a non-owner cannot tell them apart.
    """

    def __init__(self, websites: WebsiteRepository):
        self._websites = websites

    async def can_access(self, user_id: int, website_id: int) -> bool:
        website = await self._websites.get_by_id(website_id)
        return website is not None and website.is_owned_by(user_id)

    async def require_website(self, user_id: int, website_id: int) -> Website:
        website = await self._websites.get_by_id(website_id)
        if website is None or not website.is_owned_by(user_id):
            raise NotFoundOrForbiddenError("Website", website_id)
        return website

    async def require_child(
        self,
        user_id: int,
        child: _WebsiteScoped | None,
        entity_type: str,
        child_id: int,
    ) -> None:
        """Raise unless ``child`` exists and its website belongs to ``user_id``."""
        if child is None or not await self.can_access(user_id, child.website_id):
            raise NotFoundOrForbiddenError(entity_type, child_id)
