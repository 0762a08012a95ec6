"""
Local image path resolution.

Local image references are only honoured when they point inside the
directory of the Markdown file, after symlinks on both sides have been
resolved. A link inside that directory pointing elsewhere is rejected
the same way as a plain ../../etc/passwd reference.
"""

import logging
import os
from pathlib import Path
from typing import Union

from mdimport.images.errors import ImageNotFoundError, ImagePathEscapeError


logger = logging.getLogger("mdimport.images.paths")


def path_within_dir(path: Union[str, Path], directory: Union[str, Path]) -> bool:
    """True if path equals directory or lies somewhere below it."""
    try:
        rel = os.path.relpath(path, directory)
    except ValueError:
        # different drives on Windows
        return False
    if rel == os.pardir:
        return False
    return not rel.startswith(os.pardir + os.sep)


def resolve_markdown_image_path(markdown_file_path: Union[str, Path], image_ref: str) -> Path:
    """
    Resolve a local image reference relative to its Markdown file.

    Args:
        markdown_file_path: Path of the Markdown file being imported
        image_ref: Reference as written in ![alt](image_ref)

    Returns:
        Canonical, symlink-free path of the image

    Raises:
        ImagePathEscapeError: If the image lies outside the Markdown directory
        ImageNotFoundError: If the directory or the image cannot be resolved
    """
    md_dir = os.path.abspath(os.path.dirname(os.fspath(markdown_file_path)))

    image_path = image_ref
    if not os.path.isabs(image_path):
        image_path = os.path.join(md_dir, image_path)
        # Plain traversal is refused before touching the filesystem
        if not path_within_dir(os.path.normpath(image_path), md_dir):
            raise ImagePathEscapeError(
                f"image path {image_ref!r} resolves outside markdown file directory",
                image_ref=image_ref,
            )
    image_path = os.path.normpath(image_path)

    try:
        real_dir = Path(md_dir).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise ImageNotFoundError(f"resolve markdown directory: {e}", image_ref=image_ref) from e

    try:
        real_path = Path(image_path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise ImageNotFoundError(f"resolve image path {image_ref!r}: {e}", image_ref=image_ref) from e

    if not path_within_dir(real_path, real_dir):
        logger.warning(
            "Rejected image outside markdown directory",
            extra={"image_ref": image_ref, "resolved": str(real_path)},
        )
        raise ImagePathEscapeError(
            f"image path {image_ref!r} resolves outside markdown file directory",
            image_ref=image_ref,
        )

    return real_path
