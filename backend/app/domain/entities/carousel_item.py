"""Domain entity — a slide in a website's carousel."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class CarouselItem:
    """A carousel slide with a backing image.

    Slides of one website are displayed by ascending ``order``. Orders are
    expected, but not required, to be unique per website.
    """

    website_id: int
    blob_key: str
    url: str
    title: str
    subtitle: str | None = None
    active: bool = True
    order: int = 0
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def replace_blob(self, blob_key: str, url: str) -> None:
        self.blob_key = blob_key
        self.url = url
        self.updated_at = datetime.now(timezone.utc)

    def update(self, **changes) -> None:
        """Merge a partial patch; fields that are not passed keep their value.

        ``subtitle=None`` clears the subtitle. The other fields are required
        on every slide, so ``None`` for them is ignored.
        """
        for name in ("title", "subtitle", "active", "order"):
            if name not in changes:
                continue
            value = changes[name]
            if value is None and name != "subtitle":
                continue
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)
