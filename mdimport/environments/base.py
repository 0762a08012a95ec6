"""
Base classes and interfaces for Environment integrations.

This module defines the abstract contracts the import engine depends on.
The engine never talks to Google directly; it talks to a DocumentStore
and an ObjectStore, and the Google clients implement those.

Design Pattern: Strategy Pattern
================================
- EnvironmentService: Abstract base for API services (token validation)
- DocumentStore: Where the imported document lives (Google Docs)
- ObjectStore: Where local images are staged so they get a public URL (Google Drive)

Benefits:
- The engine can be tested with in-memory fakes
- Another provider only has to implement two small interfaces
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from mdimport.environments.google.docs.schemas import GoogleDoc
    from mdimport.images.contracts import EditOperation


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------
# Specific exceptions for environment operations.


class EnvironmentError(Exception):
    """Base exception for all environment-related errors."""
    pass


class APIError(EnvironmentError):
    """Raised when an API call to the provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


# ---------------------------------------------------------------------------
# DATA STRUCTURES
# ---------------------------------------------------------------------------


@dataclass
class UploadedObject:
    """
    Result of uploading bytes to an ObjectStore.

    url is whatever public-content link the store returned with the upload
    response; stores are allowed to leave it empty.
    """
    object_id: str
    url: Optional[str] = None


# ---------------------------------------------------------------------------
# ABSTRACT BASE CLASSES
# ---------------------------------------------------------------------------


class EnvironmentService(ABC):
    """
    Abstract base class for API services within a provider.

    Each service (Docs, Drive) implements this interface.
    """

    # Unique identifier for this service within the provider
    service_name: str = ""

    # OAuth scopes required for this service to function
    required_scopes: List[str] = []

    @abstractmethod
    async def validate_access(self, access_token: str) -> bool:
        """
        Verify the access token is valid for this service.

        Args:
            access_token: The OAuth access token

        Returns:
            True if token is valid and has required scopes
        """
        pass


class DocumentStore(ABC):
    """
    A remote structured document addressed by absolute character offsets.
    """

    @abstractmethod
    async def create_or_get_document(
        self,
        initial_text: str,
        title: str,
        parent_id: Optional[str] = None,
        document_id: Optional[str] = None,
    ) -> str:
        """
        Materialize initial_text as a document and return its ID.

        When document_id is given the text is appended to that document
        instead of creating a new one.
        """
        pass

    @abstractmethod
    async def get_document(self, document_id: str) -> "GoogleDoc":
        """Fetch the current structural model of a document."""
        pass

    @abstractmethod
    async def batch_apply(
        self,
        document_id: str,
        operations: List["EditOperation"],
    ) -> None:
        """Apply all operations as one atomic mutation, in order."""
        pass


class ObjectStore(ABC):
    """
    Blob storage that can hand out publicly readable URLs.
    """

    @abstractmethod
    async def upload(self, data: bytes, mime_type: str, name: str) -> UploadedObject:
        pass

    @abstractmethod
    async def set_public_readable(self, object_id: str) -> None:
        pass

    @abstractmethod
    async def get_public_url(self, object_id: str) -> Optional[str]:
        pass

    @abstractmethod
    async def delete(self, object_id: str) -> None:
        pass
