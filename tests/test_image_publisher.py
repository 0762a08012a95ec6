"""
Tests for RemoteImagePublisher and best-effort cleanup.

Focus on the compensating delete: an upload must never be left behind
when a later publish step fails, even if the caller was cancelled.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from mdimport.environments.base import APIError
from mdimport.images.cleanup import cleanup_objects_best_effort, delete_object_best_effort
from mdimport.images.errors import (
    ImageNotFoundError,
    ImagePermissionError,
    ImageUploadError,
    ImageURLResolutionError,
    UnsupportedImageFormatError,
)
from mdimport.images.publisher import RemoteImagePublisher, image_mime_type

from conftest import PNG_BYTES, FakeObjectStore


# ---------------------------------------------------------------------------
# MIME TYPES
# ---------------------------------------------------------------------------

class TestImageMimeType:
    """Tests for the extension allow-list."""

    @pytest.mark.parametrize("name,mime", [
        ("a.png", "image/png"),
        ("a.PNG", "image/png"),
        ("a.jpg", "image/jpeg"),
        ("a.JPEG", "image/jpeg"),
        ("a.gif", "image/gif"),
    ])
    def test_allowed(self, name, mime):
        assert image_mime_type(name) == mime

    @pytest.mark.parametrize("name", ["a.svg", "a.webp", "a.bmp", "a", "a.png.txt"])
    def test_rejected(self, name):
        with pytest.raises(UnsupportedImageFormatError):
            image_mime_type(name)


# ---------------------------------------------------------------------------
# PUBLISH
# ---------------------------------------------------------------------------

class TestRemoteImagePublisher:
    """Tests for RemoteImagePublisher.publish."""

    @pytest.fixture
    def image_path(self, docs_dir):
        return docs_dir / "images" / "a.png"

    @pytest.mark.asyncio
    async def test_publish_success(self, image_path, object_store):
        """Upload, share, and return URL + object ID."""
        published = await RemoteImagePublisher(object_store).publish(image_path)

        assert published.object_id == "obj-1"
        assert published.url == "https://drive.example.com/uc?id=obj-1"
        assert object_store.objects["obj-1"] == PNG_BYTES
        assert "obj-1" in object_store.public
        assert object_store.deleted == []

    @pytest.mark.asyncio
    async def test_unsupported_format_makes_no_calls(self, tmp_path):
        """A .svg fails before anything reaches the store."""
        svg = tmp_path / "x.svg"
        svg.write_text("<svg/>")
        store = AsyncMock()

        with pytest.raises(UnsupportedImageFormatError):
            await RemoteImagePublisher(store).publish(svg)

        store.upload.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_failure(self, image_path, object_store):
        """Upload errors surface as ImageUploadError; nothing to delete."""
        object_store.fail_upload = True

        with pytest.raises(ImageUploadError) as exc_info:
            await RemoteImagePublisher(object_store).publish(image_path)

        assert isinstance(exc_info.value.__cause__, APIError)
        assert object_store.deleted == []

    @pytest.mark.asyncio
    async def test_permission_failure_deletes_upload(self, image_path, object_store):
        """Failed public grant triggers the compensating delete."""
        object_store.fail_permission = True

        with pytest.raises(ImagePermissionError):
            await RemoteImagePublisher(object_store).publish(image_path)

        assert object_store.deleted == ["obj-1"]
        assert object_store.objects == {}

    @pytest.mark.asyncio
    async def test_url_fetched_when_upload_has_none(self, image_path):
        """A follow-up read provides the URL."""
        store = FakeObjectStore(return_url_on_upload=False)

        published = await RemoteImagePublisher(store).publish(image_path)

        assert published.url == "https://drive.example.com/uc?id=obj-1"

    @pytest.mark.asyncio
    async def test_url_lookup_failure_deletes_upload(self, image_path):
        store = FakeObjectStore(return_url_on_upload=False)
        store.fail_get_url = True

        with pytest.raises(ImageURLResolutionError):
            await RemoteImagePublisher(store).publish(image_path)

        assert store.deleted == ["obj-1"]

    @pytest.mark.asyncio
    async def test_no_url_at_all_deletes_upload(self, image_path):
        store = FakeObjectStore(return_url_on_upload=False)
        store.url_available = False

        with pytest.raises(ImageURLResolutionError):
            await RemoteImagePublisher(store).publish(image_path)

        assert store.deleted == ["obj-1"]

    @pytest.mark.asyncio
    async def test_cleanup_failure_does_not_mask_error(self, image_path, object_store):
        """The permission error wins over a failing delete."""
        object_store.fail_permission = True
        object_store.fail_delete = True

        with pytest.raises(ImagePermissionError):
            await RemoteImagePublisher(object_store).publish(image_path)

    @pytest.mark.asyncio
    async def test_cancelled_during_permission_still_deletes(self, image_path, object_store):
        """Cancellation of the caller does not skip the cleanup."""
        object_store.set_public_readable = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await RemoteImagePublisher(object_store).publish(image_path)

        assert object_store.deleted == ["obj-1"]

    @pytest.mark.asyncio
    async def test_unexpected_permission_error_still_deletes(self, image_path, object_store):
        """A non-API failure from the store leaves no public object behind."""
        object_store.set_public_readable = AsyncMock(
            side_effect=json.JSONDecodeError("Expecting value", "<html>", 0)
        )

        with pytest.raises(json.JSONDecodeError):
            await RemoteImagePublisher(object_store).publish(image_path)

        assert object_store.deleted == ["obj-1"]
        assert object_store.objects == {}

    @pytest.mark.asyncio
    async def test_unexpected_url_lookup_error_still_deletes(self, image_path):
        store = FakeObjectStore(return_url_on_upload=False)
        store.get_public_url = AsyncMock(side_effect=ValueError("bad payload"))

        with pytest.raises(ValueError):
            await RemoteImagePublisher(store).publish(image_path)

        assert store.deleted == ["obj-1"]

    @pytest.mark.asyncio
    async def test_unreadable_file_raises_not_found(self, docs_dir, object_store):
        """A directory with an image extension fails before any upload."""
        folder = docs_dir / "images" / "dir.png"
        folder.mkdir()

        with pytest.raises(ImageNotFoundError) as exc_info:
            await RemoteImagePublisher(object_store).publish(folder)

        assert isinstance(exc_info.value.__cause__, OSError)
        assert object_store.objects == {}


# ---------------------------------------------------------------------------
# CLEANUP
# ---------------------------------------------------------------------------

class TestCleanup:
    """Tests for best-effort deletion helpers."""

    @pytest.mark.asyncio
    async def test_deletes_all_and_ignores_blank_ids(self, object_store):
        await cleanup_objects_best_effort(object_store, ["a", "", "  ", "b"], timeout=1.0)
        assert object_store.deleted == ["a", "b"]

    @pytest.mark.asyncio
    async def test_no_ids_makes_no_calls(self):
        store = AsyncMock()
        await cleanup_objects_best_effort(store, [], timeout=1.0)
        store.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_the_rest(self):
        store = AsyncMock()
        store.delete.side_effect = [APIError("boom", status_code=500), None]

        await cleanup_objects_best_effort(store, ["a", "b"], timeout=1.0)

        assert store.delete.await_count == 2

    @pytest.mark.asyncio
    async def test_timeout_is_swallowed(self):
        """A hanging delete is abandoned after the timeout."""
        async def hang(object_id):
            await asyncio.sleep(10)

        store = AsyncMock()
        store.delete.side_effect = hang

        await delete_object_best_effort(store, "slow", timeout=0.01)

    @pytest.mark.asyncio
    async def test_cleanup_survives_caller_cancellation(self, object_store):
        """Cancelling the waiter leaves the delete running to completion."""
        started = asyncio.Event()
        release = asyncio.Event()
        original_delete = object_store.delete

        async def slow_delete(object_id):
            started.set()
            await release.wait()
            await original_delete(object_id)

        object_store.delete = slow_delete

        waiter = asyncio.ensure_future(
            delete_object_best_effort(object_store, "obj-9", timeout=5.0)
        )
        await started.wait()
        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter

        release.set()
        for _ in range(10):
            await asyncio.sleep(0)

        assert object_store.deleted == ["obj-9"]
