"""
Image Extractor - Swap Markdown image syntax for placeholder tokens.

The cleaned text is what gets uploaded as the document body. Each image
leaves behind a <<IMG_N>> token that is located again in the remote
document once it has been converted.

Recognized forms:
    ![alt](ref)
    ![alt](ref "title")   ![alt](ref 'title')   ![alt](ref (title))
    ![alt](<ref with spaces>)   ...and the same with a trailing title
"""

import re
from typing import List, Tuple

from mdimport.images.contracts import ImageReference


MARKDOWN_IMAGE_PATTERN = re.compile(
    r"!\[([^\]]*)\]"                            # ![alt]
    r"\((?:<([^>]+)>|([^)\s]+))"                # (<ref> or (ref
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?"  # optional title
    r"\)"
)


def extract_markdown_images(content: str) -> Tuple[str, List[ImageReference]]:
    """
    Replace every image reference with its placeholder.

    Args:
        content: Markdown source text

    Returns:
        (cleaned_text, images) where images are ordered by their position
        in the source and indexed 0..k-1

    Example:
        cleaned, images = extract_markdown_images("A ![x](x.png) B")
        # cleaned == "A <<IMG_0>> B"
    """
    images: List[ImageReference] = []

    def _replace(match: "re.Match[str]") -> str:
        ref = match.group(2) or match.group(3)
        image = ImageReference(
            index=len(images),
            alt_text=match.group(1),
            original_ref=ref,
        )
        images.append(image)
        return image.placeholder()

    cleaned = MARKDOWN_IMAGE_PATTERN.sub(_replace, content)
    return cleaned, images
