"""Unit tests for the WebsiteService."""

import pytest

from app.application.schemas import CarouselItemCreate, WebsiteCreate, WebsiteUpdate
from app.domain.entities import ActivityAction, RequestContext
from app.domain.exceptions import DuplicateEntityError, NotFoundOrForbiddenError


@pytest.mark.asyncio
async def test_create_website_records_activity_with_context(harness, owner):
    context = RequestContext(ip_address="10.0.0.1", user_agent="pytest")

    website = await harness.website_service.create_website(
        owner.id, WebsiteCreate(name="sunset-tours", about="Tours"), context
    )

    assert website.owner_id == owner.id
    entries = await harness.activity_log.list_by_user(owner.id)
    assert entries[0].action == ActivityAction.CREATE_WEBSITE
    assert entries[0].ip_address == "10.0.0.1"
    assert entries[0].details["website_name"] == "sunset-tours"


@pytest.mark.asyncio
async def test_create_website_with_taken_name_conflicts(harness, owner, website):
    with pytest.raises(DuplicateEntityError):
        await harness.website_service.create_website(
            owner.id, WebsiteCreate(name=website.name, about="again")
        )


@pytest.mark.asyncio
async def test_rename_to_taken_name_conflicts(harness, owner, website):
    other = await harness.add_website(owner, "taken")

    with pytest.raises(DuplicateEntityError):
        await harness.website_service.update_website(owner.id, website.id, WebsiteUpdate(name=other.name))

    renamed = await harness.website_service.update_website(
        owner.id, website.id, WebsiteUpdate(name=website.name, about="new about")
    )
    assert renamed.about == "new about"


@pytest.mark.asyncio
async def test_foreign_website_is_indistinguishable_from_missing(harness, website):
    intruder = await harness.add_user("mallory")

    with pytest.raises(NotFoundOrForbiddenError) as foreign:
        await harness.website_service.get_website(intruder.id, website.id)
    with pytest.raises(NotFoundOrForbiddenError) as missing:
        await harness.website_service.get_website(intruder.id, 424242)

    assert type(foreign.value) is type(missing.value)
    with pytest.raises(NotFoundOrForbiddenError):
        await harness.website_service.delete_website(intruder.id, website.id)


@pytest.mark.asyncio
async def test_delete_website_cascades_records_and_blobs(harness, owner, website, upload):
    for _ in range(2):
        await harness.image_service.upload_image(owner.id, website.id, upload)
    for title in ("a", "b", "c"):
        await harness.carousel_service.create_item(
            owner.id, website.id, CarouselItemCreate(title=title), upload
        )
    assert len(harness.blob_keys()) == 5

    await harness.website_service.delete_website(owner.id, website.id)

    assert harness.blob_keys() == set()
    assert await harness.images.list_by_website(website.id) == []
    assert await harness.carousel_service.list_items(website.id) == []
    with pytest.raises(NotFoundOrForbiddenError):
        await harness.carousel_service.list_items(website.id, owner_id=owner.id)

    entries = await harness.activity_log.list_by_user(owner.id)
    delete_entry = next(e for e in entries if e.action == ActivityAction.DELETE_WEBSITE)
    assert delete_entry.details["deleted_images"] == 2
    assert delete_entry.details["deleted_carousel_items"] == 3


@pytest.mark.asyncio
async def test_list_websites_includes_counts_and_thumbnail(harness, owner, website, upload):
    empty_site = await harness.add_website(owner, "empty-site")
    image = await harness.image_service.upload_image(owner.id, website.id, upload)
    await harness.carousel_service.create_item(
        owner.id, website.id, CarouselItemCreate(title="slide"), upload
    )

    summaries = {s.website.id: s for s in await harness.website_service.list_websites(owner.id)}

    assert summaries[website.id].image_count == 1
    assert summaries[website.id].carousel_item_count == 1
    assert summaries[website.id].thumbnail_url == image.url
    assert summaries[empty_site.id].thumbnail_url is None


@pytest.mark.asyncio
async def test_detail_contains_children(harness, owner, website, upload):
    await harness.image_service.upload_image(owner.id, website.id, upload)
    await harness.carousel_service.create_item(
        owner.id, website.id, CarouselItemCreate(title="slide", active=False), upload
    )

    detail = await harness.website_service.get_website_detail(owner.id, website.id)

    assert len(detail.images) == 1
    assert [c.title for c in detail.carousel_items] == ["slide"]
