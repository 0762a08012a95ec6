"""
Errors - Failures of the image substitution engine.

Hierarchy:
==========
ImageImportError
├── UnsupportedImageFormatError   # extension not PNG/JPG/GIF, no network call made
├── ImagePathEscapeError          # local path resolves outside the Markdown directory
├── ImageNotFoundError            # local path (or a parent directory) does not exist
├── ImageUploadError              # object store refused the upload
├── ImagePermissionError          # public read grant failed (upload was deleted)
├── ImageURLResolutionError       # no public URL obtainable (upload was deleted)
├── PlaceholderNotLocatedError    # strict mode only
└── ImageURLNotResolvedError      # strict mode only

Remote failures keep the originating APIError as __cause__.
"""

from typing import Optional


class ImageImportError(Exception):
    """Base exception for the image substitution engine."""

    def __init__(self, message: str, image_ref: Optional[str] = None):
        super().__init__(message)
        self.image_ref = image_ref


class UnsupportedImageFormatError(ImageImportError):
    pass


class ImagePathEscapeError(ImageImportError):
    pass


class ImageNotFoundError(ImageImportError):
    pass


class ImageUploadError(ImageImportError):
    pass


class ImagePermissionError(ImageImportError):
    pass


class ImageURLResolutionError(ImageImportError):
    pass


class PlaceholderNotLocatedError(ImageImportError):
    pass


class ImageURLNotResolvedError(ImageImportError):
    pass
