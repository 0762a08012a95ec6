"""
Images Module - Markdown image substitution engine.

Pipeline:
=========
1. extractor     : ![alt](ref) -> <<IMG_N>> placeholders
2. paths         : local ref -> canonical path inside the Markdown directory
3. publisher     : local file -> public URL (staged in the object store)
4. locator       : placeholder -> absolute [start, end) in the converted doc
5. edit_script   : ranges + URLs -> ordered DeleteRange / InsertImage steps
"""

from mdimport.images.contracts import (
    DeleteRange,
    EditOperation,
    ImageReference,
    InsertImage,
    OffsetRange,
    PublishedImage,
    placeholder_for,
)
from mdimport.images.edit_script import build_image_insert_operations
from mdimport.images.errors import (
    ImageImportError,
    ImageNotFoundError,
    ImagePathEscapeError,
    ImagePermissionError,
    ImageUploadError,
    ImageURLNotResolvedError,
    ImageURLResolutionError,
    PlaceholderNotLocatedError,
    UnsupportedImageFormatError,
)
from mdimport.images.extractor import extract_markdown_images
from mdimport.images.locator import find_placeholder_ranges
from mdimport.images.paths import resolve_markdown_image_path
from mdimport.images.publisher import RemoteImagePublisher

__all__ = [
    "DeleteRange",
    "EditOperation",
    "ImageReference",
    "InsertImage",
    "OffsetRange",
    "PublishedImage",
    "placeholder_for",
    "build_image_insert_operations",
    "ImageImportError",
    "ImageNotFoundError",
    "ImagePathEscapeError",
    "ImagePermissionError",
    "ImageUploadError",
    "ImageURLNotResolvedError",
    "ImageURLResolutionError",
    "PlaceholderNotLocatedError",
    "UnsupportedImageFormatError",
    "extract_markdown_images",
    "find_placeholder_ranges",
    "resolve_markdown_image_path",
    "RemoteImagePublisher",
]
