"""Abstract repository interface (port) for CarouselItem persistence."""

from abc import ABC, abstractmethod

from app.domain.entities import CarouselItem


class CarouselItemRepository(ABC):
    """Port for carousel persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, item_id: int) -> CarouselItem | None:
        ...

    @abstractmethod
    async def list_by_website(
        self, website_id: int, *, active_only: bool = False
    ) -> list[CarouselItem]:
        """Slides of one website by ascending order (ties broken by ID)."""
        ...

    @abstractmethod
    async def count_by_website(self, website_id: int) -> int:
        ...

    @abstractmethod
    async def next_order(self, website_id: int) -> int:
        """Return ``max(order) + 1`` for the website, or 0 when it has no slides.

        Implementations must serialize concurrent callers for the same
        website until the surrounding transaction ends, so that two
        appends never observe the same maximum.
        """
        ...

    @abstractmethod
    async def create(self, item: CarouselItem) -> CarouselItem:
        ...

    @abstractmethod
    async def update(self, item: CarouselItem) -> CarouselItem:
        ...

    @abstractmethod
    async def update_orders(self, website_id: int, orders: list[tuple[int, int]]) -> int:
        """Apply ``(item_id, order)`` pairs scoped to one website.

        Pairs naming an item of another website (or no item at all) are
        skipped. Returns the number of pairs applied.
        """
        ...

    @abstractmethod
    async def delete(self, item_id: int) -> bool:
        ...

    @abstractmethod
    async def all_blob_keys(self) -> set[str]:
        """Every blob key currently referenced by a carousel record."""
        ...
