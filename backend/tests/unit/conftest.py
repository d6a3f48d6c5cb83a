"""In-memory fakes of the application ports, plus fully wired services.

The fake unit of work snapshots the in-memory tables on every commit and
restores the last snapshot on rollback or on an injected commit failure,
which mirrors what a real transaction does to uncommitted changes.
"""

import asyncio
import copy
from dataclasses import dataclass, field, replace
from datetime import timedelta

import pytest
import pytest_asyncio

from app.application.interfaces import (
    ActivityLogRepository,
    CarouselItemRepository,
    ImageTransformer,
    MediaItemRepository,
    PasswordHasher,
    TokenService,
    TransformConstraints,
    TransformedImage,
    UnitOfWork,
    UserRepository,
    WebsiteRepository,
)
from app.application.services import (
    ActivityRecorder,
    AuthService,
    CarouselService,
    ImageService,
    IncomingFile,
    MediaPipeline,
    OrphanBlobSweeper,
    OwnershipGuard,
    WebsiteService,
)
from app.domain.entities import (
    ActivityEntry,
    CarouselItem,
    MediaItem,
    User,
    Website,
)
from app.domain.exceptions import (
    AuthenticationError,
    ProcessingFailedError,
    StorageUnavailableError,
)
from app.infrastructure.storage.local_file_storage import LocalBlobStorage


@dataclass
class InMemoryTables:
    users: dict[int, User] = field(default_factory=dict)
    websites: dict[int, Website] = field(default_factory=dict)
    images: dict[int, MediaItem] = field(default_factory=dict)
    carousel: dict[int, CarouselItem] = field(default_factory=dict)
    activity: dict[int, ActivityEntry] = field(default_factory=dict)
    last_id: int = 0

    def next_id(self) -> int:
        self.last_id += 1
        return self.last_id


class InMemoryStore:
    def __init__(self):
        self.tables = InMemoryTables()
        self._committed = copy.deepcopy(self.tables)

    def commit(self) -> None:
        self._committed = copy.deepcopy(self.tables)

    def rollback(self) -> None:
        self.tables = copy.deepcopy(self._committed)


class FakeUnitOfWork(UnitOfWork):
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.commits = 0
        self.fail_next_commit = False

    async def commit(self) -> None:
        if self.fail_next_commit:
            self.fail_next_commit = False
            self._store.rollback()
            raise StorageUnavailableError("Failed to commit changes to the record store")
        self._store.commit()
        self.commits += 1

    async def rollback(self) -> None:
        self._store.rollback()


class FakeUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(self, user_id: int) -> User | None:
        user = self._store.tables.users.get(user_id)
        return replace(user) if user else None

    async def get_by_email(self, email: str) -> User | None:
        for user in self._store.tables.users.values():
            if user.email == email:
                return replace(user)
        return None

    async def find_by_email_or_username(self, email: str, username: str) -> User | None:
        for user in self._store.tables.users.values():
            if user.email == email or user.username == username:
                return replace(user)
        return None

    async def create(self, user: User) -> User:
        user.id = self._store.tables.next_id()
        self._store.tables.users[user.id] = replace(user)
        return user


class FakeWebsiteRepository(WebsiteRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(self, website_id: int) -> Website | None:
        website = self._store.tables.websites.get(website_id)
        return replace(website) if website else None

    async def get_by_name(self, name: str) -> Website | None:
        for website in self._store.tables.websites.values():
            if website.name == name:
                return replace(website)
        return None

    async def list_by_owner(self, owner_id: int) -> list[Website]:
        websites = [w for w in self._store.tables.websites.values() if w.owner_id == owner_id]
        return [replace(w) for w in sorted(websites, key=lambda w: w.id, reverse=True)]

    async def create(self, website: Website) -> Website:
        website.id = self._store.tables.next_id()
        self._store.tables.websites[website.id] = replace(website)
        return website

    async def update(self, website: Website) -> Website:
        if website.id not in self._store.tables.websites:
            raise ValueError(f"Website {website.id} not found")
        self._store.tables.websites[website.id] = replace(website)
        return website

    async def delete(self, website_id: int) -> bool:
        tables = self._store.tables
        if tables.websites.pop(website_id, None) is None:
            return False
        tables.images = {k: v for k, v in tables.images.items() if v.website_id != website_id}
        tables.carousel = {k: v for k, v in tables.carousel.items() if v.website_id != website_id}
        return True


class FakeMediaItemRepository(MediaItemRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.fail_on_update = False

    def _sorted(self, items) -> list[MediaItem]:
        ordered = sorted(items, key=lambda i: (i.created_at, i.id), reverse=True)
        return [replace(i) for i in ordered]

    async def get_by_id(self, item_id: int) -> MediaItem | None:
        item = self._store.tables.images.get(item_id)
        return replace(item) if item else None

    async def list_by_website(self, website_id: int) -> list[MediaItem]:
        return self._sorted(i for i in self._store.tables.images.values() if i.website_id == website_id)

    async def list_by_owner(self, owner_id: int) -> list[MediaItem]:
        owned = {w.id for w in self._store.tables.websites.values() if w.owner_id == owner_id}
        return self._sorted(i for i in self._store.tables.images.values() if i.website_id in owned)

    async def count_by_website(self, website_id: int) -> int:
        return len(await self.list_by_website(website_id))

    async def create(self, item: MediaItem) -> MediaItem:
        item.id = self._store.tables.next_id()
        self._store.tables.images[item.id] = replace(item)
        return item

    async def update(self, item: MediaItem) -> MediaItem:
        if self.fail_on_update:
            raise StorageUnavailableError("Record store unavailable during image update")
        self._store.tables.images[item.id] = replace(item)
        return item

    async def delete(self, item_id: int) -> bool:
        return self._store.tables.images.pop(item_id, None) is not None

    async def all_blob_keys(self) -> set[str]:
        return {i.blob_key for i in self._store.tables.images.values()}


class FakeCarouselItemRepository(CarouselItemRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(self, item_id: int) -> CarouselItem | None:
        item = self._store.tables.carousel.get(item_id)
        return replace(item) if item else None

    async def list_by_website(self, website_id: int, *, active_only: bool = False) -> list[CarouselItem]:
        items = [
            i for i in self._store.tables.carousel.values()
            if i.website_id == website_id and (i.active or not active_only)
        ]
        return [replace(i) for i in sorted(items, key=lambda i: (i.order, i.id))]

    async def count_by_website(self, website_id: int) -> int:
        return len(await self.list_by_website(website_id))

    async def next_order(self, website_id: int) -> int:
        orders = [i.order for i in self._store.tables.carousel.values() if i.website_id == website_id]
        return max(orders, default=-1) + 1

    async def create(self, item: CarouselItem) -> CarouselItem:
        item.id = self._store.tables.next_id()
        self._store.tables.carousel[item.id] = replace(item)
        return item

    async def update(self, item: CarouselItem) -> CarouselItem:
        self._store.tables.carousel[item.id] = replace(item)
        return item

    async def update_orders(self, website_id: int, orders: list[tuple[int, int]]) -> int:
        applied = 0
        for item_id, order in orders:
            item = self._store.tables.carousel.get(item_id)
            if item is not None and item.website_id == website_id:
                item.order = order
                applied += 1
        return applied

    async def delete(self, item_id: int) -> bool:
        return self._store.tables.carousel.pop(item_id, None) is not None

    async def all_blob_keys(self) -> set[str]:
        return {i.blob_key for i in self._store.tables.carousel.values()}


class FakeActivityLogRepository(ActivityLogRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.fail = False

    async def create(self, entry: ActivityEntry) -> ActivityEntry:
        if self.fail:
            raise StorageUnavailableError("Record store unavailable during activity append")
        entry.id = self._store.tables.next_id()
        self._store.tables.activity[entry.id] = replace(entry)
        return entry

    async def list_by_user(self, user_id: int, *, skip: int = 0, limit: int = 100) -> list[ActivityEntry]:
        entries = [e for e in self._store.tables.activity.values() if e.user_id == user_id]
        entries.sort(key=lambda e: (e.created_at, e.id), reverse=True)
        return entries[skip : skip + limit]


class FakeTransformer(ImageTransformer):
    """Pretends every input decodes to a fixed size; ``fail``/``delay`` inject faults."""

    def __init__(self):
        self.fail = False
        self.delay = 0.0
        self.calls = 0

    async def transform(self, content: bytes, constraints: TransformConstraints) -> TransformedImage:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ProcessingFailedError("Failed to process image")
        return TransformedImage(
            content=b"JPEG" + content,
            width=800,
            height=600,
            mime_type="image/jpeg",
            extension=".jpg",
        )


class FakePasswordHasher(PasswordHasher):
    def hash(self, secret: str) -> str:
        return f"hashed:{secret}"

    def verify(self, secret: str, digest: str) -> bool:
        return digest == f"hashed:{secret}"


class FakeTokenService(TokenService):
    def issue(self, claims: dict) -> str:
        return f"token:{claims['sub']}"

    def verify(self, token: str) -> dict:
        if not token.startswith("token:"):
            raise AuthenticationError("Invalid or expired token")
        return {"sub": token.removeprefix("token:")}


@dataclass
class Harness:
    """Every fake plus the services wired on top of them."""

    store: InMemoryStore
    storage: LocalBlobStorage
    transformer: FakeTransformer
    uow: FakeUnitOfWork
    users: FakeUserRepository
    websites: FakeWebsiteRepository
    images: FakeMediaItemRepository
    carousel_items: FakeCarouselItemRepository
    activity_log: FakeActivityLogRepository
    pipeline: MediaPipeline
    activity: ActivityRecorder
    auth_service: AuthService
    website_service: WebsiteService
    image_service: ImageService
    carousel_service: CarouselService
    sweeper: OrphanBlobSweeper

    def blob_keys(self) -> set[str]:
        return {blob.key for blob in self.storage.list_blobs()}

    async def add_user(self, username: str) -> User:
        user = await self.users.create(
            User(username=username, email=f"{username}@example.com", password_hash="x")
        )
        self.store.commit()
        return user

    async def add_website(self, owner: User, name: str) -> Website:
        website = await self.websites.create(Website(name=name, about="about", owner_id=owner.id))
        self.store.commit()
        return website


@pytest.fixture
def harness(tmp_path) -> Harness:
    store = InMemoryStore()
    storage = LocalBlobStorage(str(tmp_path / "uploads"), "http://cdn.test")
    transformer = FakeTransformer()
    uow = FakeUnitOfWork(store)
    users = FakeUserRepository(store)
    websites = FakeWebsiteRepository(store)
    images = FakeMediaItemRepository(store)
    carousel_items = FakeCarouselItemRepository(store)
    activity_log = FakeActivityLogRepository(store)

    pipeline = MediaPipeline(
        storage,
        transformer,
        TransformConstraints(),
        allowed_mime_types=["image/jpeg", "image/png", "image/webp"],
        max_upload_bytes=1024 * 1024,
        timeout=0.5,
    )
    guard = OwnershipGuard(websites)
    activity = ActivityRecorder(activity_log, uow)

    return Harness(
        store=store,
        storage=storage,
        transformer=transformer,
        uow=uow,
        users=users,
        websites=websites,
        images=images,
        carousel_items=carousel_items,
        activity_log=activity_log,
        pipeline=pipeline,
        activity=activity,
        auth_service=AuthService(users, FakePasswordHasher(), FakeTokenService(), uow),
        website_service=WebsiteService(
            websites, images, carousel_items, guard, pipeline, uow, activity,
        ),
        image_service=ImageService(images, guard, pipeline, uow, activity),
        carousel_service=CarouselService(carousel_items, guard, pipeline, uow, activity),
        sweeper=OrphanBlobSweeper(storage, images, carousel_items, timedelta(minutes=60)),
    )


@pytest.fixture
def upload() -> IncomingFile:
    return IncomingFile(filename="photo.png", content_type="image/png", content=b"\x89PNG-data")


@pytest_asyncio.fixture
async def owner(harness) -> User:
    return await harness.add_user("alice")


@pytest_asyncio.fixture
async def website(harness, owner) -> Website:
    return await harness.add_website(owner, "alice-site")
