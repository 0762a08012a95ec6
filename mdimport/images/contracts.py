"""
Contracts - Data structures shared by the image substitution engine.

ImageReference is produced by the extractor, OffsetRange by the locator,
and EditOperation is the engine's only output: a script of delete/insert
steps that is replayed, in order, against a single linear document buffer.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Union


PLACEHOLDER_FORMAT = "<<IMG_{index}>>"
REMOTE_PREFIXES = ("http://", "https://")


def placeholder_for(index: int) -> str:
    """Token substituted for the image with the given index."""
    return PLACEHOLDER_FORMAT.format(index=index)


@dataclass(frozen=True)
class ImageReference:
    """
    One image found in the Markdown source.

    Example:
        ImageReference(index=0, alt_text="logo", original_ref="img/logo.png")
    """

    index: int
    """Sequential position among the images of one document (0, 1, 2, ...)."""

    alt_text: str
    """Alt text between the square brackets."""

    original_ref: str
    """Path or URL exactly as written in the Markdown."""

    def placeholder(self) -> str:
        return placeholder_for(self.index)

    def is_remote(self) -> bool:
        return self.original_ref.startswith(REMOTE_PREFIXES)


@dataclass(frozen=True)
class OffsetRange:
    """Half-open [start, end) range of absolute document offsets."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class DeleteRange:
    """Remove the characters in [start, end)."""

    start: int
    end: int

    def to_request(self) -> Dict:
        """Docs API batchUpdate request body for this step."""
        return {
            "deleteContentRange": {
                "range": {
                    "startIndex": self.start,
                    "endIndex": self.end,
                }
            }
        }


@dataclass(frozen=True)
class InsertImage:
    """Insert the image behind url as an inline object at at_index."""

    url: str
    at_index: int

    def to_request(self) -> Dict:
        return {
            "insertInlineImage": {
                "uri": self.url,
                "location": {"index": self.at_index},
            }
        }


EditOperation = Union[DeleteRange, InsertImage]


@dataclass(frozen=True)
class PublishedImage:
    """A local image staged in the object store with a public URL."""

    url: str
    object_id: str
    local_path: Path
