"""
Remote Image Publisher - Stage local images where the Docs renderer can fetch them.

The Docs API only inserts images it can download by URL, so every local
image is uploaded to the object store (Google Drive), shared as
anyone-with-the-link reader, and its public content link handed back.

Flow:
=====
1. Check the extension against the allow-list (no network call on failure)
2. Upload the bytes, asking for the object ID and public link
3. Grant public read access
4. Fetch the public link if the upload response did not carry one
5. On failure in 3 or 4, delete the upload before raising

The returned object ID is a staging artifact; the caller deletes it once
the image has been inserted into the document.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from mdimport.core.config import settings
from mdimport.environments.base import APIError, ObjectStore
from mdimport.images.cleanup import delete_object_best_effort
from mdimport.images.contracts import PublishedImage
from mdimport.images.errors import (
    ImageNotFoundError,
    ImagePermissionError,
    ImageUploadError,
    ImageURLResolutionError,
    UnsupportedImageFormatError,
)


logger = logging.getLogger("mdimport.images.publisher")


MIME_PNG = "image/png"
MIME_JPEG = "image/jpeg"
MIME_GIF = "image/gif"

IMAGE_MIME_TYPES: Dict[str, str] = {
    ".png": MIME_PNG,
    ".jpg": MIME_JPEG,
    ".jpeg": MIME_JPEG,
    ".gif": MIME_GIF,
}


def image_mime_type(path: Union[str, Path]) -> str:
    """
    MIME type for an allowed image file.

    Raises:
        UnsupportedImageFormatError: If the extension is not PNG, JPG/JPEG or GIF
    """
    ext = Path(path).suffix.lower()
    mime_type = IMAGE_MIME_TYPES.get(ext)
    if mime_type is None:
        raise UnsupportedImageFormatError(
            f"unsupported image format {ext!r} (use PNG, JPG, or GIF)",
            image_ref=str(path),
        )
    return mime_type


class RemoteImagePublisher:
    """
    Uploads local images and returns publicly readable URLs.

    Example:
        publisher = RemoteImagePublisher(GoogleDriveClient(access_token="ya29.xxx"))
        published = await publisher.publish(Path("/notes/img/chart.png"))
        # ... insert published.url into the document ...
        await drive.delete(published.object_id)
    """

    def __init__(self, object_store: ObjectStore, cleanup_timeout: Optional[float] = None):
        """
        Args:
            object_store: Where images are staged
            cleanup_timeout: Seconds allowed for a compensating delete
        """
        self.object_store = object_store
        self.cleanup_timeout = (
            cleanup_timeout if cleanup_timeout is not None else settings.IMAGE_CLEANUP_TIMEOUT
        )

    async def publish(self, local_path: Union[str, Path]) -> PublishedImage:
        """
        Upload one image and make it publicly readable.

        Args:
            local_path: Already validated path of the image

        Returns:
            PublishedImage with the public URL and the staged object ID

        Raises:
            UnsupportedImageFormatError: Extension not allowed
            ImageNotFoundError: File could not be read
            ImageUploadError: Upload rejected by the store
            ImagePermissionError: Public grant failed (upload deleted)
            ImageURLResolutionError: No public URL obtainable (upload deleted)
        """
        path = Path(local_path)
        mime_type = image_mime_type(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ImageNotFoundError(f"open image {str(path)!r}: {e}", image_ref=str(path)) from e

        logger.info(f"Uploading image: {path.name} ({mime_type}, {len(data)} bytes)")

        try:
            uploaded = await self.object_store.upload(data, mime_type, path.name)
        except APIError as e:
            raise ImageUploadError(f"upload image {path.name!r}: {e}", image_ref=str(path)) from e

        object_id = uploaded.object_id

        # Any failure past this point, cancellation included, deletes the upload
        try:
            url = await self._share(object_id, uploaded.url, path)
        except BaseException:
            await self._discard(object_id)
            raise

        logger.info(f"Published image {path.name} as {object_id}")
        return PublishedImage(url=url, object_id=object_id, local_path=path)

    async def _share(self, object_id: str, url: Optional[str], path: Path) -> str:
        try:
            await self.object_store.set_public_readable(object_id)
        except APIError as e:
            raise ImagePermissionError(f"set image permissions: {e}", image_ref=str(path)) from e

        if not url:
            try:
                url = await self.object_store.get_public_url(object_id)
            except APIError as e:
                raise ImageURLResolutionError(f"get image URL: {e}", image_ref=str(path)) from e

        if not url:
            raise ImageURLResolutionError(
                f"could not obtain public URL for uploaded image {str(path)!r}",
                image_ref=str(path),
            )
        return url

    async def _discard(self, object_id: str) -> None:
        logger.info(f"Deleting staged image after failed publish: {object_id}")
        await delete_object_best_effort(self.object_store, object_id, self.cleanup_timeout)
