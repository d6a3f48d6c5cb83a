"""SQLAlchemy repositories against a real (SQLite) database."""

import pytest

from app.domain.entities import (
    ActivityAction,
    ActivityEntry,
    CarouselItem,
    MediaItem,
    User,
    Website,
)
from app.domain.exceptions import DuplicateEntityError
from app.infrastructure.database.repositories import (
    SQLAlchemyActivityLogRepository,
    SQLAlchemyCarouselItemRepository,
    SQLAlchemyMediaItemRepository,
    SQLAlchemyUserRepository,
    SQLAlchemyWebsiteRepository,
)


async def _seed_website(session, name="site") -> Website:
    user = await SQLAlchemyUserRepository(session).create(
        User(username=f"{name}-owner", email=f"{name}@example.com", password_hash="x")
    )
    return await SQLAlchemyWebsiteRepository(session).create(
        Website(name=name, about="about", owner_id=user.id)
    )


def _slide(website_id: int, key: str, order: int = 0, active: bool = True) -> CarouselItem:
    return CarouselItem(
        website_id=website_id, blob_key=key, url=f"http://test/uploads/{key}",
        title=key, order=order, active=active,
    )


def _image(website_id: int, key: str) -> MediaItem:
    return MediaItem(
        website_id=website_id, blob_key=key, url=f"http://test/uploads/{key}",
        width=10, height=10, original_filename="a.png", file_size=100, mime_type="image/jpeg",
    )


@pytest.mark.asyncio
async def test_next_order_appends_after_maximum(session):
    website = await _seed_website(session)
    repo = SQLAlchemyCarouselItemRepository(session)

    assert await repo.next_order(website.id) == 0
    await repo.create(_slide(website.id, "carousel/a.jpg", order=4))
    await repo.create(_slide(website.id, "carousel/b.jpg", order=1))

    assert await repo.next_order(website.id) == 5


@pytest.mark.asyncio
async def test_update_orders_skips_foreign_items(session):
    website = await _seed_website(session, "one")
    other = await _seed_website(session, "two")
    repo = SQLAlchemyCarouselItemRepository(session)
    five = await repo.create(_slide(website.id, "carousel/5.jpg", order=0))
    six = await repo.create(_slide(website.id, "carousel/6.jpg", order=1))
    foreign = await repo.create(_slide(other.id, "carousel/x.jpg", order=3))

    applied = await repo.update_orders(website.id, [(five.id, 2), (six.id, 1), (foreign.id, 0)])
    await session.commit()

    assert applied == 2
    assert [i.id for i in await repo.list_by_website(website.id)] == [six.id, five.id]
    assert (await repo.get_by_id(foreign.id)).order == 3


@pytest.mark.asyncio
async def test_active_only_listing(session):
    website = await _seed_website(session)
    repo = SQLAlchemyCarouselItemRepository(session)
    shown = await repo.create(_slide(website.id, "carousel/on.jpg"))
    await repo.create(_slide(website.id, "carousel/off.jpg", order=1, active=False))

    public = await repo.list_by_website(website.id, active_only=True)

    assert [i.id for i in public] == [shown.id]
    assert await repo.count_by_website(website.id) == 2


@pytest.mark.asyncio
async def test_website_delete_removes_children(session):
    website = await _seed_website(session)
    images = SQLAlchemyMediaItemRepository(session)
    slides = SQLAlchemyCarouselItemRepository(session)
    await images.create(_image(website.id, "images/a.jpg"))
    await slides.create(_slide(website.id, "carousel/a.jpg"))

    assert await SQLAlchemyWebsiteRepository(session).delete(website.id) is True
    await session.commit()

    assert await images.list_by_website(website.id) == []
    assert await slides.list_by_website(website.id) == []
    assert await images.all_blob_keys() == set()
    assert await SQLAlchemyWebsiteRepository(session).delete(website.id) is False


@pytest.mark.asyncio
async def test_duplicate_website_name_raises_conflict(session):
    website = await _seed_website(session)

    with pytest.raises(DuplicateEntityError):
        await SQLAlchemyWebsiteRepository(session).create(
            Website(name=website.name, about="again", owner_id=website.owner_id)
        )


@pytest.mark.asyncio
async def test_images_listed_by_owner_across_websites(session):
    first = await _seed_website(session, "first")
    second = await SQLAlchemyWebsiteRepository(session).create(
        Website(name="second", about="about", owner_id=first.owner_id)
    )
    stranger = await _seed_website(session, "stranger")
    repo = SQLAlchemyMediaItemRepository(session)
    await repo.create(_image(first.id, "images/1.jpg"))
    await repo.create(_image(second.id, "images/2.jpg"))
    await repo.create(_image(stranger.id, "images/3.jpg"))

    owned = await repo.list_by_owner(first.owner_id)

    assert {i.blob_key for i in owned} == {"images/1.jpg", "images/2.jpg"}
    assert await repo.count_by_website(first.id) == 1


@pytest.mark.asyncio
async def test_activity_round_trip(session):
    website = await _seed_website(session)
    repo = SQLAlchemyActivityLogRepository(session)

    await repo.create(
        ActivityEntry(
            user_id=website.owner_id,
            action=ActivityAction.REORDER_CAROUSEL,
            details={"website_id": website.id, "applied": 2},
            ip_address="127.0.0.1",
        )
    )

    entries = await repo.list_by_user(website.owner_id)
    assert entries[0].action is ActivityAction.REORDER_CAROUSEL
    assert entries[0].details == {"website_id": website.id, "applied": 2}
