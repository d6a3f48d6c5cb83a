"""Unit tests for the ImageService."""

import pytest

from app.application.services import IncomingFile
from app.domain.exceptions import (
    InputValidationError,
    NotFoundOrForbiddenError,
    ProcessingFailedError,
    StorageUnavailableError,
)


@pytest.mark.asyncio
async def test_upload_image_records_output_metadata(harness, owner, website, upload):
    item = await harness.image_service.upload_image(owner.id, website.id, upload, alt_text="Beach")

    assert item.id is not None
    assert item.width == 800
    assert item.height == 600
    assert item.mime_type == "image/jpeg"
    assert item.original_filename == "photo.png"
    assert item.alt_text == "Beach"
    assert item.blob_key.startswith("images/") and item.blob_key.endswith(".jpg")
    assert harness.storage.blob_exists(item.blob_key)


@pytest.mark.asyncio
async def test_upload_rejects_oversized_file(harness, owner, website):
    big = IncomingFile(filename="big.png", content_type="image/png", content=b"0" * (1024 * 1024 + 1))

    with pytest.raises(InputValidationError, match="File too large"):
        await harness.image_service.upload_image(owner.id, website.id, big)

    assert harness.transformer.calls == 0


@pytest.mark.asyncio
async def test_upload_to_foreign_website_is_not_found(harness, website, upload):
    intruder = await harness.add_user("mallory")

    with pytest.raises(NotFoundOrForbiddenError):
        await harness.image_service.upload_image(intruder.id, website.id, upload)

    assert harness.blob_keys() == set()


@pytest.mark.asyncio
async def test_upload_transform_failure_leaves_nothing_behind(harness, owner, website, upload):
    harness.transformer.fail = True

    with pytest.raises(ProcessingFailedError):
        await harness.image_service.upload_image(owner.id, website.id, upload)

    assert await harness.images.list_by_website(website.id) == []
    assert harness.blob_keys() == set()


@pytest.mark.asyncio
async def test_replace_commit_failure_keeps_old_record_and_blob(harness, owner, website, upload):
    item = await harness.image_service.upload_image(owner.id, website.id, upload, alt_text="old")
    harness.uow.fail_next_commit = True

    with pytest.raises(StorageUnavailableError):
        await harness.image_service.update_image(
            owner.id, item.id, alt_text="new", upload=upload
        )

    current = await harness.image_service.get_image(owner.id, item.id)
    assert current.blob_key == item.blob_key
    assert current.alt_text == "old"
    assert harness.blob_keys() == {item.blob_key}


@pytest.mark.asyncio
async def test_replace_record_write_failure_keeps_old_blob(harness, owner, website, upload):
    item = await harness.image_service.upload_image(owner.id, website.id, upload)
    harness.images.fail_on_update = True

    with pytest.raises(StorageUnavailableError):
        await harness.image_service.update_image(owner.id, item.id, upload=upload)

    assert harness.blob_keys() == {item.blob_key}


@pytest.mark.asyncio
async def test_replace_success_swaps_blobs(harness, owner, website, upload):
    item = await harness.image_service.upload_image(owner.id, website.id, upload)

    updated = await harness.image_service.update_image(owner.id, item.id, upload=upload)

    assert harness.blob_keys() == {updated.blob_key}
    assert updated.blob_key != item.blob_key


@pytest.mark.asyncio
async def test_update_alt_text_only_keeps_blob(harness, owner, website, upload):
    item = await harness.image_service.upload_image(owner.id, website.id, upload)

    updated = await harness.image_service.update_image(owner.id, item.id, alt_text="Sunset")

    assert updated.alt_text == "Sunset"
    assert updated.blob_key == item.blob_key
    assert harness.transformer.calls == 1


@pytest.mark.asyncio
async def test_list_user_images_spans_own_websites_only(harness, owner, website, upload):
    second_site = await harness.add_website(owner, "second-site")
    other = await harness.add_user("bob")
    other_site = await harness.add_website(other, "bob-site")

    await harness.image_service.upload_image(owner.id, website.id, upload)
    await harness.image_service.upload_image(owner.id, second_site.id, upload)
    await harness.image_service.upload_image(other.id, other_site.id, upload)

    mine = await harness.image_service.list_user_images(owner.id)
    assert {i.website_id for i in mine} == {website.id, second_site.id}


@pytest.mark.asyncio
async def test_delete_image_removes_blob_and_is_not_repeatable(harness, owner, website, upload):
    item = await harness.image_service.upload_image(owner.id, website.id, upload)

    await harness.image_service.delete_image(owner.id, item.id)

    assert harness.blob_keys() == set()
    with pytest.raises(NotFoundOrForbiddenError):
        await harness.image_service.delete_image(owner.id, item.id)
