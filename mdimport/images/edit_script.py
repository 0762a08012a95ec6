"""
Edit Script Builder - Turn located placeholders into Docs edits.

The document is one linear buffer. Deleting or inserting at an offset
shifts every offset above it, so the script walks the placeholders from
the highest start offset down to the lowest: each edit only touches
text above the placeholders that are still waiting, and their ranges
stay valid without being located again.

For every image the script holds two steps:
    DeleteRange(start, end)       # drop the <<IMG_N>> token
    InsertImage(url, start)       # put the image where the token was
"""

import logging
from typing import List, Mapping

from mdimport.images.contracts import DeleteRange, EditOperation, ImageReference, InsertImage, OffsetRange
from mdimport.images.errors import ImageURLNotResolvedError, PlaceholderNotLocatedError


logger = logging.getLogger("mdimport.images.edit_script")


def build_image_insert_operations(
    placeholders: Mapping[str, OffsetRange],
    images: List[ImageReference],
    image_urls: Mapping[int, str],
    strict: bool = False,
) -> List[EditOperation]:
    """
    Build the ordered delete/insert script for all insertable images.

    Args:
        placeholders: Token -> located range, from find_placeholder_ranges
        images: Extracted image references
        image_urls: Image index -> URL the Docs renderer can download
        strict: Raise instead of skipping an image that lacks a range or URL

    Returns:
        Operations to submit, in order, as one batchUpdate

    Raises:
        PlaceholderNotLocatedError: strict and a placeholder was not located
        ImageURLNotResolvedError: strict and an image has no URL
    """
    entries = []
    for image in images:
        token = image.placeholder()
        offset_range = placeholders.get(token)
        if offset_range is None:
            if strict:
                raise PlaceholderNotLocatedError(
                    f"placeholder {token} not found in document",
                    image_ref=image.original_ref,
                )
            logger.warning(f"Skipping image {image.index}: placeholder {token} not located")
            continue

        url = image_urls.get(image.index)
        if not url:
            if strict:
                raise ImageURLNotResolvedError(
                    f"no URL resolved for image {image.original_ref!r}",
                    image_ref=image.original_ref,
                )
            logger.warning(f"Skipping image {image.index}: no URL resolved")
            continue

        entries.append((offset_range, url))

    entries.sort(key=lambda entry: entry[0].start, reverse=True)

    operations: List[EditOperation] = []
    for offset_range, url in entries:
        operations.append(DeleteRange(start=offset_range.start, end=offset_range.end))
        operations.append(InsertImage(url=url, at_index=offset_range.start))
    return operations

