"""
Markdown Import Service - Import a Markdown file into a Google Doc with images.

This service ties the image substitution engine to the remote stores:

Architecture:
=============
1. Read the Markdown file and swap images for <<IMG_N>> placeholders
2. Create the document from the cleaned text (or append to an existing one)
3. Remote images keep their URL; local images are resolved inside the
   Markdown directory and staged in Drive with a public link
4. Re-fetch the document and locate every placeholder
5. Replace placeholders with inline images in one batchUpdate
6. Delete the staged uploads

Usage:
======
    from mdimport.services.markdown_import_service import MarkdownImportService

    service = MarkdownImportService.from_access_token("ya29.xxx")
    result = await service.import_markdown("notes/report.md", title="Report")
    print(result.link)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from mdimport.core.config import settings
from mdimport.environments.base import DocumentStore, ObjectStore
from mdimport.environments.google.docs import GoogleDocsClient, docs_web_view_link
from mdimport.environments.google.drive import GoogleDriveClient
from mdimport.images.cleanup import cleanup_objects_best_effort
from mdimport.images.contracts import ImageReference
from mdimport.images.edit_script import build_image_insert_operations
from mdimport.images.errors import ImageImportError
from mdimport.images.extractor import extract_markdown_images
from mdimport.images.locator import find_placeholder_ranges
from mdimport.images.paths import resolve_markdown_image_path
from mdimport.images.publisher import RemoteImagePublisher


logger = logging.getLogger("mdimport.services.markdown_import")


# ---------------------------------------------------------------------------
# RESULT DATACLASSES
# ---------------------------------------------------------------------------

@dataclass
class SkippedImage:
    """An image that was not inserted, and why."""
    index: int
    original_ref: str
    reason: str


@dataclass
class ImportResult:
    """Outcome of one Markdown import."""
    document_id: str
    title: str
    link: str
    images_found: int = 0
    images_inserted: int = 0
    skipped: List[SkippedImage] = field(default_factory=list)


class MarkdownImportService:
    """
    Imports Markdown files into documents, substituting images.

    Attributes:
        document_store: Where the document is created and edited
        object_store: Where local images are staged
        strict: Fail when a placeholder or URL is missing instead of skipping
        abort_on_image_error: Fail the import when one image cannot be published
        debug: Log every located placeholder and edit operation
    """

    def __init__(
        self,
        document_store: DocumentStore,
        object_store: ObjectStore,
        strict: Optional[bool] = None,
        abort_on_image_error: Optional[bool] = None,
        debug: Optional[bool] = None,
        cleanup_timeout: Optional[float] = None,
        publisher: Optional[RemoteImagePublisher] = None,
    ):
        self.document_store = document_store
        self.object_store = object_store
        self.strict = settings.STRICT_IMAGE_PLACEHOLDERS if strict is None else strict
        self.abort_on_image_error = (
            settings.ABORT_ON_IMAGE_ERROR if abort_on_image_error is None else abort_on_image_error
        )
        self.debug = settings.DEBUG if debug is None else debug
        self.cleanup_timeout = (
            settings.BATCH_CLEANUP_TIMEOUT if cleanup_timeout is None else cleanup_timeout
        )
        self.publisher = publisher or RemoteImagePublisher(object_store)

    @classmethod
    def from_access_token(cls, access_token: str, **kwargs) -> "MarkdownImportService":
        """Build a service backed by Google Docs and Google Drive."""
        drive = GoogleDriveClient(access_token=access_token)
        docs = GoogleDocsClient(access_token=access_token, drive=drive)
        return cls(document_store=docs, object_store=drive, **kwargs)

    # -------------------------------------------------------------------------
    # IMPORT
    # -------------------------------------------------------------------------

    async def import_markdown(
        self,
        markdown_path: Union[str, Path],
        title: Optional[str] = None,
        parent_id: Optional[str] = None,
        document_id: Optional[str] = None,
    ) -> ImportResult:
        """
        Import a Markdown file.

        Args:
            markdown_path: File to import
            title: Title of the new document (defaults to the file stem)
            parent_id: Destination folder for a new document
            document_id: Append to this document instead of creating one

        Returns:
            ImportResult with document link and image counts

        Raises:
            ImageImportError: An image failed and abort_on_image_error is set,
                or a placeholder/URL is missing in strict mode
            APIError: Any Docs/Drive failure outside image publishing
        """
        path = Path(markdown_path)
        title = (title or path.stem).strip()
        content = path.read_text(encoding="utf-8")

        cleaned, images = extract_markdown_images(content)
        logger.info(
            f"Importing {path.name}",
            extra={"images": len(images), "existing_document": bool(document_id)},
        )

        doc_id = await self.document_store.create_or_get_document(
            cleaned,
            title,
            parent_id=parent_id,
            document_id=document_id,
        )
        result = ImportResult(
            document_id=doc_id,
            title=title,
            link=docs_web_view_link(doc_id),
            images_found=len(images),
        )
        if not images:
            return result

        await self._insert_images(path, doc_id, images, result)
        return result

    async def _insert_images(
        self,
        markdown_path: Path,
        document_id: str,
        images: List[ImageReference],
        result: ImportResult,
    ) -> None:
        image_urls: Dict[int, str] = {}
        staged_ids: List[str] = []

        try:
            for image in images:
                if image.is_remote():
                    image_urls[image.index] = image.original_ref
                    continue

                try:
                    local_path = resolve_markdown_image_path(markdown_path, image.original_ref)
                    published = await self.publisher.publish(local_path)
                except ImageImportError as e:
                    if self.abort_on_image_error:
                        raise
                    logger.warning(f"Skipping image {image.original_ref!r}: {e}")
                    result.skipped.append(SkippedImage(image.index, image.original_ref, str(e)))
                    continue

                staged_ids.append(published.object_id)
                image_urls[image.index] = published.url

            document = await self.document_store.get_document(document_id)
            placeholders = find_placeholder_ranges(document, len(images))
            if self.debug:
                for token, offset_range in placeholders.items():
                    logger.debug(f"Located {token} at [{offset_range.start}, {offset_range.end})")

            operations = build_image_insert_operations(
                placeholders, images, image_urls, strict=self.strict
            )
            if self.debug:
                for operation in operations:
                    logger.debug(f"Edit: {operation}")

            for image in images:
                if image.index in image_urls and image.placeholder() not in placeholders:
                    result.skipped.append(
                        SkippedImage(image.index, image.original_ref, "placeholder not found in document")
                    )

            await self.document_store.batch_apply(document_id, operations)
            result.images_inserted = len(operations) // 2
        finally:
            await cleanup_objects_best_effort(self.object_store, staged_ids, self.cleanup_timeout)

        logger.info(
            f"Inserted {result.images_inserted} of {result.images_found} image(s)",
            extra={"document_id": document_id, "skipped": len(result.skipped)},
        )
